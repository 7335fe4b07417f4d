"""SQLAlchemy declarative Base shared by the account and product models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; Base.metadata drives Alembic autogenerate and test schemas."""
