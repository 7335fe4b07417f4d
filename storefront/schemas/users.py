"""Request/response schemas for account management and profile photos."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from storefront.core.security import Role
from storefront.schemas.auth import AccountSummary, normalize_email


class AccountCreate(BaseModel):
    """Body for admin account creation."""

    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    role: Role = Role.CUSTOMER

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return normalize_email(v)


class AccountUpdate(BaseModel):
    """Partial update; only fields that are set change."""

    username: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=1, max_length=128)
    role: Role | None = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return normalize_email(v)


class AccountsListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[AccountSummary]


class ProfilePhotoUpload(BaseModel):
    """Base64 image, optionally as a data URL (data:image/png;base64,...)."""

    base64_image: str | None = Field(default=None, description="Base64-encoded image data")
    mime_type: str | None = Field(default=None, description="image/jpeg, image/jpg, image/png or image/gif")


class ProfilePhotoUploadResponse(BaseModel):
    message: str
    photo_type: str
    photo_size: int


class ProfilePhotoResponse(BaseModel):
    """Stored photo as a data URL."""

    image_data: str
    mime_type: str
