"""Account directory: lookups, creation, update and deletion of accounts."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.security import Role, hash_password
from storefront.models import Account
from storefront.schemas.users import AccountUpdate
from storefront.services.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already registered"
USERNAME_TAKEN = "Username already taken"


def find_by_email(db: Session, email: str) -> Account | None:
    return db.query(Account).filter(Account.email == email).first()


def find_by_username(db: Session, username: str) -> Account | None:
    return db.query(Account).filter(Account.username == username).first()


def get_account(db: Session, account_id: int) -> Account:
    """Return the account or raise NotFoundError."""
    account = db.get(Account, account_id)
    if account is None:
        raise NotFoundError("User not found")
    return account


def list_accounts(db: Session) -> list[Account]:
    return db.query(Account).order_by(Account.id).all()


def _commit_or_conflict(db: Session) -> None:
    """Commit; a unique-constraint race surfaces as InvalidInputError."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise InvalidInputError("Email or username already registered") from e


def create_account(
    db: Session,
    username: str,
    email: str,
    password: str,
    role: Role = Role.CUSTOMER,
) -> Account:
    """Create an account with a hashed password. Email and username must be unused."""
    if find_by_email(db, email) is not None:
        raise InvalidInputError(EMAIL_TAKEN)
    if find_by_username(db, username) is not None:
        raise InvalidInputError(USERNAME_TAKEN)
    account = Account(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    db.add(account)
    _commit_or_conflict(db)
    db.refresh(account)
    logger.info("Account created: id=%s role=%s", account.id, account.role.value)
    return account


def update_account(db: Session, account: Account, changes: AccountUpdate) -> Account:
    """Apply the fields set in `changes`. A new password is hashed before storing."""
    if changes.email is not None and changes.email != account.email:
        if find_by_email(db, changes.email) is not None:
            raise InvalidInputError(EMAIL_TAKEN)
        account.email = changes.email
    if changes.username is not None and changes.username != account.username:
        if find_by_username(db, changes.username) is not None:
            raise InvalidInputError(USERNAME_TAKEN)
        account.username = changes.username
    if changes.password is not None:
        account.password_hash = hash_password(changes.password)
    if changes.role is not None:
        account.role = changes.role
    _commit_or_conflict(db)
    db.refresh(account)
    logger.info("Account updated: id=%s", account.id)
    return account


def delete_account(db: Session, account_id: int) -> None:
    account = get_account(db, account_id)
    db.delete(account)
    db.commit()
    logger.info("Account deleted: id=%s", account_id)
