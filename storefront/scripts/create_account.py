"""
Create an account (e.g. the first admin). Run from project root:
  python -m storefront.scripts.create_account USERNAME EMAIL PASSWORD [role]
Example:
  python -m storefront.scripts.create_account admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import EmailStr, TypeAdapter, ValidationError

from storefront.core.database import SessionLocal
from storefront.core.security import Role
from storefront.schemas.auth import normalize_email
from storefront.services.accounts import create_account
from storefront.services.errors import ServiceError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a storefront account.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.CUSTOMER.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > 255:
        logger.error("Invalid username length.")
        return 1
    if not args.password or len(args.password) > 128:
        logger.error("Password must be 1-128 characters.")
        return 1
    try:
        email = normalize_email(_email_adapter.validate_python(args.email.strip()))
    except ValidationError:
        logger.error("Invalid email address: %s", args.email)
        return 1

    db = SessionLocal()
    try:
        account = create_account(
            db,
            username=username,
            email=email,
            password=args.password,
            role=Role(args.role),
        )
        logger.info("Created account '%s' with role '%s'.", account.username, account.role.value)
        return 0
    except ServiceError as e:
        logger.error("Could not create account: %s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
