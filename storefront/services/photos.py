"""Profile photo storage: base64 in, raw bytes in the account row, data URL out."""

import base64
import binascii
import logging
import re

from sqlalchemy.orm import Session

from storefront.models import Account
from storefront.services.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

ALLOWED_PHOTO_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/gif"})
DEFAULT_PHOTO_TYPE = "image/jpeg"
MAX_PROFILE_PHOTO_BYTES = 5 * 1024 * 1024  # 5 MB

# Leading "data:image/png;base64," of a data URL.
_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")


def decode_photo(base64_image: str | None, mime_type: str | None) -> tuple[bytes, str]:
    """Validate and decode an uploaded photo; return (image bytes, MIME type)."""
    if not base64_image or not base64_image.strip():
        raise InvalidInputError("No image data provided")
    if mime_type and mime_type not in ALLOWED_PHOTO_TYPES:
        raise InvalidInputError("Invalid image type. Only JPEG, PNG, and GIF are allowed.")
    data = _DATA_URL_PREFIX.sub("", base64_image.strip())
    if not data:
        raise InvalidInputError("No image data provided")
    try:
        image = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError("Image data is not valid base64.") from e
    if len(image) > MAX_PROFILE_PHOTO_BYTES:
        raise InvalidInputError(
            f"Image must not exceed {MAX_PROFILE_PHOTO_BYTES // (1024 * 1024)} MB."
        )
    return image, mime_type or DEFAULT_PHOTO_TYPE


def set_profile_photo(
    db: Session,
    account: Account,
    base64_image: str | None,
    mime_type: str | None,
) -> tuple[str, int]:
    """Store the photo on the account; return (MIME type, size in bytes)."""
    image, photo_type = decode_photo(base64_image, mime_type)
    account.profile_photo = image
    account.profile_photo_type = photo_type
    db.commit()
    logger.info("Profile photo stored: account id=%s size=%s", account.id, len(image))
    return photo_type, len(image)


def get_profile_photo(account: Account) -> tuple[str, str]:
    """Return (data URL, MIME type) or raise NotFoundError when no photo is stored."""
    if not account.profile_photo:
        raise NotFoundError("No profile photo found")
    photo_type = account.profile_photo_type or DEFAULT_PHOTO_TYPE
    encoded = base64.b64encode(account.profile_photo).decode("ascii")
    return f"data:{photo_type};base64,{encoded}", photo_type


def delete_profile_photo(db: Session, account: Account) -> None:
    account.profile_photo = None
    account.profile_photo_type = None
    db.commit()
    logger.info("Profile photo deleted: account id=%s", account.id)
