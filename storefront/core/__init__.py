"""Core app configuration, database, and security."""

from storefront.core.config import get_settings, settings
from storefront.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
