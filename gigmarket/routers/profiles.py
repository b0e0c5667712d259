"""Profile endpoints: view, edit, avatar and resume uploads."""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, File, UploadFile

from gigmarket.core.constants import AVATAR_MAX_BYTES, RESUME_MAX_BYTES
from gigmarket.models.profile import ProfileDetail, ProfileUpdate
from gigmarket.routers.deps import CurrentSession
from gigmarket.services.profiles import get_profile_detail, update_profile
from gigmarket.services.storage import upload_avatar, upload_resume

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=ProfileDetail)
async def my_profile(session: CurrentSession) -> ProfileDetail:
    return get_profile_detail(session.user_id)


@router.put("/me", response_model=ProfileDetail)
async def edit_my_profile(payload: ProfileUpdate, session: CurrentSession) -> ProfileDetail:
    """Edit username, bio, skills, education and links."""
    return update_profile(session.user_id, payload)


@router.post("/me/avatar")
async def replace_avatar(
    session: CurrentSession,
    file: UploadFile = File(...),
) -> dict[str, Any]:
    """Upload a JPEG, PNG or WebP avatar of at most 3 MB."""
    # One byte past the limit is enough for the size check to reject it.
    content = await file.read(AVATAR_MAX_BYTES + 1)
    url = upload_avatar(session.user_id, content, file.content_type)
    return {"avatar_url": url}


@router.post("/me/resume")
async def replace_resume(
    session: CurrentSession,
    file: UploadFile = File(...),
) -> dict[str, Any]:
    """Upload a PDF resume of at most 5 MB."""
    content = await file.read(RESUME_MAX_BYTES + 1)
    url = upload_resume(session.user_id, content, file.content_type)
    return {"resume_url": url}


@router.get("/{user_id}", response_model=ProfileDetail)
async def public_profile(user_id: UUID) -> ProfileDetail:
    return get_profile_detail(str(user_id))
