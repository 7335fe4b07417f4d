"""Unit tests for storefront.services.photos: decoding and validation of uploaded images."""

import base64
import unittest
from unittest.mock import MagicMock

from storefront.services.errors import InvalidInputError, NotFoundError
from storefront.services.photos import (
    DEFAULT_PHOTO_TYPE,
    MAX_PROFILE_PHOTO_BYTES,
    decode_photo,
    delete_profile_photo,
    get_profile_photo,
)

GIF_BYTES = b"GIF89a\x01\x00\x01\x00"
GIF_B64 = base64.b64encode(GIF_BYTES).decode("ascii")


class TestDecodePhoto(unittest.TestCase):
    def test_plain_base64(self) -> None:
        image, mime = decode_photo(GIF_B64, "image/gif")
        self.assertEqual(image, GIF_BYTES)
        self.assertEqual(mime, "image/gif")

    def test_data_url_prefix_stripped(self) -> None:
        image, _ = decode_photo(f"data:image/gif;base64,{GIF_B64}", "image/gif")
        self.assertEqual(image, GIF_BYTES)

    def test_mime_type_defaults_to_jpeg(self) -> None:
        _, mime = decode_photo(GIF_B64, None)
        self.assertEqual(mime, DEFAULT_PHOTO_TYPE)

    def test_empty_data(self) -> None:
        for value in (None, "", "   ", "data:image/png;base64,"):
            with self.subTest(value=value):
                with self.assertRaises(InvalidInputError) as ctx:
                    decode_photo(value, None)
                self.assertEqual(ctx.exception.message, "No image data provided")

    def test_disallowed_mime_type(self) -> None:
        with self.assertRaises(InvalidInputError):
            decode_photo(GIF_B64, "application/pdf")

    def test_invalid_base64(self) -> None:
        with self.assertRaises(InvalidInputError):
            decode_photo("!!!not base64!!!", "image/png")

    def test_too_large(self) -> None:
        big = base64.b64encode(b"\x00" * (MAX_PROFILE_PHOTO_BYTES + 1)).decode("ascii")
        with self.assertRaises(InvalidInputError):
            decode_photo(big, "image/png")


class TestStoredPhoto(unittest.TestCase):
    def test_get_without_photo(self) -> None:
        account = MagicMock(profile_photo=None)
        with self.assertRaises(NotFoundError):
            get_profile_photo(account)

    def test_get_returns_data_url(self) -> None:
        account = MagicMock(profile_photo=GIF_BYTES, profile_photo_type="image/gif")
        data_url, mime = get_profile_photo(account)
        self.assertEqual(data_url, f"data:image/gif;base64,{GIF_B64}")
        self.assertEqual(mime, "image/gif")

    def test_delete_clears_fields_and_commits(self) -> None:
        account = MagicMock(profile_photo=GIF_BYTES, profile_photo_type="image/gif")
        session = MagicMock()
        delete_profile_photo(session, account)
        self.assertIsNone(account.profile_photo)
        self.assertIsNone(account.profile_photo_type)
        session.commit.assert_called_once()


if __name__ == "__main__":
    unittest.main()
