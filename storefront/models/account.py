"""ORM model for registered accounts (auth, RBAC, and profile photo)."""

from sqlalchemy import Column, DateTime, Enum, Integer, LargeBinary, String, func

from storefront.core.security import Role
from storefront.models.base import Base


class Account(Base):
    """
    Registered principal for JWT authentication and role-based access control.

    password_hash is a bcrypt hash; the plaintext is never stored.
    profile_photo holds the raw image bytes, profile_photo_type its MIME type.
    """

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            Role,
            name="account_role",
            native_enum=False,
            length=32,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=Role.CUSTOMER,
    )
    profile_photo = Column(LargeBinary, nullable=True)
    profile_photo_type = Column(String(64), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
