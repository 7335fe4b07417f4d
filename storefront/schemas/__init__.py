"""Pydantic request/response schemas."""

from storefront.schemas.auth import (
    AccountSummary,
    CurrentAccount,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
)
from storefront.schemas.health import HealthResponse
from storefront.schemas.products import (
    ProductCreate,
    ProductOut,
    ProductsListResponse,
    ProductUpdate,
)
from storefront.schemas.users import (
    AccountCreate,
    AccountsListResponse,
    AccountUpdate,
    ProfilePhotoResponse,
    ProfilePhotoUpload,
    ProfilePhotoUploadResponse,
)

__all__ = [
    "AccountCreate",
    "AccountSummary",
    "AccountsListResponse",
    "AccountUpdate",
    "CurrentAccount",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ProductCreate",
    "ProductOut",
    "ProductUpdate",
    "ProductsListResponse",
    "ProfilePhotoResponse",
    "ProfilePhotoUpload",
    "ProfilePhotoUploadResponse",
    "RegisterRequest",
]
