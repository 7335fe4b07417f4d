"""Registration and login."""

import logging

from sqlalchemy.orm import Session

from storefront.core.security import Role, verify_password
from storefront.models import Account
from storefront.schemas.auth import RegisterRequest
from storefront.services.accounts import create_account, find_by_email
from storefront.services.errors import (
    NotFoundError,
    PermissionDeniedError,
    WrongCredentialError,
)

logger = logging.getLogger(__name__)


def register_account(
    db: Session,
    body: RegisterRequest,
    allow_admin_self_registration: bool = False,
) -> Account:
    """
    Create an account from a public registration request.

    Requesting the admin role is refused unless allow_admin_self_registration is set;
    otherwise any anonymous caller could grant themselves admin access.
    """
    if body.role == Role.ADMIN and not allow_admin_self_registration:
        logger.warning("Rejected admin self-registration for username=%s", body.username)
        raise PermissionDeniedError("Self-registration as admin is not allowed")
    return create_account(
        db,
        username=body.username,
        email=body.email,
        password=body.password,
        role=body.role,
    )


def authenticate(db: Session, email: str, password: str) -> Account:
    """Return the account whose password matches, or raise NotFoundError / WrongCredentialError."""
    account = find_by_email(db, email)
    if account is None:
        logger.info("Login failed: unknown email")
        raise NotFoundError("User not found")
    if not verify_password(password, account.password_hash):
        logger.info("Login failed: wrong password for account id=%s", account.id)
        raise WrongCredentialError("Wrong password")
    logger.info("Login succeeded: account id=%s", account.id)
    return account
