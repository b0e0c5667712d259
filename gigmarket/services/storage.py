"""Avatar and resume uploads via Supabase Storage.

Files are validated (type and size) before upload, stored under the
caller's id with a fixed name so a new upload replaces the old one, and the
public URL is written back to the profile.
"""

from __future__ import annotations

import logging

from gigmarket.core.config import settings
from gigmarket.core.constants import (
    AVATAR_CONTENT_TYPES,
    AVATAR_MAX_BYTES,
    RESUME_CONTENT_TYPES,
    RESUME_MAX_BYTES,
)
from gigmarket.core.exceptions import InvalidInputError
from gigmarket.db.supabase import get_supabase
from gigmarket.services.profiles import update_profile_fields

logger = logging.getLogger(__name__)


def _validate_upload(
    content: bytes,
    content_type: str | None,
    allowed: dict[str, str],
    max_bytes: int,
    label: str,
) -> str:
    """Return the file extension for *content_type* or raise ``InvalidInputError``."""
    if content_type not in allowed:
        raise InvalidInputError(
            f"{label} must be one of: {', '.join(sorted(allowed))}"
        )
    if not content:
        raise InvalidInputError(f"{label} file is empty")
    if len(content) > max_bytes:
        raise InvalidInputError(
            f"{label} must be at most {max_bytes // (1024 * 1024)} MB"
        )
    return allowed[content_type]


def _upload_public(bucket: str, path: str, content: bytes, content_type: str) -> str:
    client = get_supabase()
    storage = client.storage.from_(bucket)
    storage.upload(
        path,
        content,
        {"content-type": content_type, "upsert": "true"},
    )
    return storage.get_public_url(path)


def upload_avatar(user_id: str, content: bytes, content_type: str | None) -> str:
    """Upload a JPEG/PNG/WebP avatar (max 3 MB) and return its public URL."""
    ext = _validate_upload(
        content, content_type, AVATAR_CONTENT_TYPES, AVATAR_MAX_BYTES, "Avatar"
    )
    url = _upload_public(
        settings.AVATAR_BUCKET, f"{user_id}/avatar.{ext}", content, content_type or ""
    )
    update_profile_fields(user_id, {"avatar_url": url})
    logger.info("avatar_uploaded", extra={"user_id": user_id, "size": len(content)})
    return url


def upload_resume(user_id: str, content: bytes, content_type: str | None) -> str:
    """Upload a PDF resume (max 5 MB) and return its public URL."""
    ext = _validate_upload(
        content, content_type, RESUME_CONTENT_TYPES, RESUME_MAX_BYTES, "Resume"
    )
    url = _upload_public(
        settings.RESUME_BUCKET, f"{user_id}/resume.{ext}", content, content_type or ""
    )
    update_profile_fields(user_id, {"resume_url": url})
    logger.info("resume_uploaded", extra={"user_id": user_id, "size": len(content)})
    return url
