"""Registration, JWT login, and auth dependencies (get_current_account, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.core.config import Settings, get_settings
from storefront.core.database import get_db
from storefront.core.security import TokenError, TokenService, get_token_service
from storefront.schemas.auth import (
    AccountSummary,
    CurrentAccount,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)
from storefront.services.auth import authenticate, register_account
from storefront.services.errors import ServiceError

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_account(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentAccount:
    """
    Dependency: require a valid Bearer JWT and return the identity it carries.

    Raises 401 if the header is missing or the token is rejected. The identity
    comes from the token claims alone; no database lookup is made. It is also
    stored on request.state.account for anything further down the request.
    """
    if credentials is None:
        raise _unauthenticated("Not authenticated")
    try:
        claims = tokens.verify(credentials.credentials)
    except TokenError as e:
        logger.info("Rejected bearer token: %s", e.message)
        raise _unauthenticated(e.message) from e
    current = CurrentAccount(id=claims.account_id, email=claims.email, role=claims.role)
    request.state.account = current
    return current


def require_admin(
    current_account: Annotated[CurrentAccount, Depends(get_current_account)],
) -> CurrentAccount:
    """Dependency: require authenticated account with role 'admin'. Raises 403 for non-admin."""
    if not current_account.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_account


def require_self_or_admin(
    account_id: int,
    current_account: Annotated[CurrentAccount, Depends(get_current_account)],
) -> CurrentAccount:
    """Dependency for /users/{account_id} routes: the account itself or an admin."""
    if not current_account.is_admin and current_account.id != account_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )
    return current_account


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    """Create a customer account. Email and username must not already be registered."""
    try:
        register_account(
            db,
            body,
            allow_admin_self_registration=settings.ALLOW_ADMIN_SELF_REGISTRATION,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT access token valid for 24 hours.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    try:
        account = authenticate(db, body.email, body.password)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    token = tokens.issue(account.id, account.email, account.role)
    return LoginResponse(
        access_token=token,
        token_type="bearer",
        user=AccountSummary.model_validate(account),
    )


@router.get("/me", response_model=CurrentAccount)
def me(
    current_account: Annotated[CurrentAccount, Depends(get_current_account)],
) -> CurrentAccount:
    """Return the identity carried by the caller's token."""
    return current_account
