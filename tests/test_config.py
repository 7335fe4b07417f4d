"""Unit tests for storefront.core.config: required signing secret and URL validation."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from storefront.core.config import Settings


class TestJwtSecretRequired(unittest.TestCase):
    """A missing or blank JWT_SECRET is a startup error, never a silent default."""

    def test_missing_secret_raises(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_blank_secret_raises(self) -> None:
        with patch.dict(os.environ, {"JWT_SECRET": "   "}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_secret_loaded_from_env(self) -> None:
        with patch.dict(os.environ, {"JWT_SECRET": "s3cret"}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.JWT_SECRET.get_secret_value(), "s3cret")
        self.assertEqual(settings.JWT_ALGORITHM, "HS256")
        self.assertFalse(settings.ALLOW_ADMIN_SELF_REGISTRATION)


class TestOtherSettings(unittest.TestCase):
    def test_sqlite_url_accepted(self) -> None:
        with patch.dict(os.environ, {"JWT_SECRET": "s", "DATABASE_URL": "sqlite://"}, clear=True):
            self.assertEqual(Settings(_env_file=None).DATABASE_URL, "sqlite://")

    def test_unsupported_database_url_rejected(self) -> None:
        env = {"JWT_SECRET": "s", "DATABASE_URL": "mysql://root@localhost/shop"}
        with patch.dict(os.environ, env, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_non_hmac_algorithm_rejected(self) -> None:
        with patch.dict(os.environ, {"JWT_SECRET": "s", "JWT_ALGORITHM": "RS256"}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_log_level_normalized(self) -> None:
        with patch.dict(os.environ, {"JWT_SECRET": "s", "LOG_LEVEL": "debug"}, clear=True):
            self.assertEqual(Settings(_env_file=None).LOG_LEVEL, "DEBUG")


if __name__ == "__main__":
    unittest.main()
