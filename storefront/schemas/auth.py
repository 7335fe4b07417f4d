"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from storefront.core.security import Role


def normalize_email(value: str | None) -> str | None:
    """Emails are unique case-insensitively; store and look them up lower-cased."""
    if value is None:
        return None
    return value.strip().lower()


class RegisterRequest(BaseModel):
    """Body for self-registration."""

    username: str = Field(..., min_length=1, max_length=255, description="Unique username")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")
    role: Role = Field(default=Role.CUSTOMER, description="Requested role")

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return normalize_email(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return normalize_email(v)


class AccountSummary(BaseModel):
    """Non-sensitive account fields (no password hash, no photo)."""

    model_config = {"from_attributes": True}

    id: int
    username: str
    email: str
    role: Role


class LoginResponse(BaseModel):
    """JWT access token returned after successful login, plus the account it belongs to."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: AccountSummary


class CurrentAccount(BaseModel):
    """Identity resolved from a verified bearer token."""

    id: int
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
