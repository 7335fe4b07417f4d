"""Account management and profile photo endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from storefront.api.v1.auth import require_admin, require_self_or_admin
from storefront.core.database import get_db
from storefront.schemas.auth import AccountSummary, CurrentAccount, MessageResponse
from storefront.schemas.users import (
    AccountCreate,
    AccountsListResponse,
    AccountUpdate,
    ProfilePhotoResponse,
    ProfilePhotoUpload,
    ProfilePhotoUploadResponse,
)
from storefront.services import accounts, photos
from storefront.services.errors import ServiceError

router = APIRouter()


@router.get("", response_model=AccountsListResponse)
def list_users(
    _admin: Annotated[CurrentAccount, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountsListResponse:
    """List all accounts (admin only). Password hashes and photos are never included."""
    return AccountsListResponse(
        users=[AccountSummary.model_validate(a) for a in accounts.list_accounts(db)]
    )


@router.post("", response_model=AccountSummary, status_code=status.HTTP_201_CREATED)
def create_user(
    body: AccountCreate,
    _admin: Annotated[CurrentAccount, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountSummary:
    """Create an account with any role (admin only)."""
    try:
        account = accounts.create_account(
            db,
            username=body.username,
            email=body.email,
            password=body.password,
            role=body.role,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return AccountSummary.model_validate(account)


@router.get("/{account_id}", response_model=AccountSummary)
def get_user(
    account_id: int,
    _current: Annotated[CurrentAccount, Depends(require_self_or_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountSummary:
    try:
        account = accounts.get_account(db, account_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return AccountSummary.model_validate(account)


@router.put("/{account_id}", response_model=MessageResponse)
def update_user(
    account_id: int,
    body: AccountUpdate,
    current: Annotated[CurrentAccount, Depends(require_self_or_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Update any subset of username, email, password and role. Only admins may change roles."""
    try:
        account = accounts.get_account(db, account_id)
        if body.role is not None and body.role != account.role and not current.is_admin:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only admins can change roles",
            )
        accounts.update_account(db, account, body)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return MessageResponse(message="User updated")


@router.delete("/{account_id}", response_model=MessageResponse)
def delete_user(
    account_id: int,
    _admin: Annotated[CurrentAccount, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    try:
        accounts.delete_account(db, account_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return MessageResponse(message="User deleted")


@router.post("/{account_id}/profile-photo", response_model=ProfilePhotoUploadResponse)
def upload_profile_photo(
    account_id: int,
    body: ProfilePhotoUpload,
    _current: Annotated[CurrentAccount, Depends(require_self_or_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfilePhotoUploadResponse:
    """
    Store a profile photo sent as base64 (a data URL prefix is accepted).
    Allowed types: JPEG, PNG, GIF; defaults to image/jpeg when mime_type is omitted.
    """
    try:
        account = accounts.get_account(db, account_id)
        photo_type, size = photos.set_profile_photo(
            db, account, body.base64_image, body.mime_type
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return ProfilePhotoUploadResponse(
        message="Profile photo uploaded successfully",
        photo_type=photo_type,
        photo_size=size,
    )


@router.get("/{account_id}/profile-photo", response_model=ProfilePhotoResponse)
def get_profile_photo(
    account_id: int,
    _current: Annotated[CurrentAccount, Depends(require_self_or_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfilePhotoResponse:
    try:
        account = accounts.get_account(db, account_id)
        image_data, mime_type = photos.get_profile_photo(account)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return ProfilePhotoResponse(image_data=image_data, mime_type=mime_type)


@router.delete("/{account_id}/profile-photo", response_model=MessageResponse)
def delete_profile_photo(
    account_id: int,
    _current: Annotated[CurrentAccount, Depends(require_self_or_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    try:
        account = accounts.get_account(db, account_id)
        photos.delete_profile_photo(db, account)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return MessageResponse(message="Profile photo deleted successfully")
