"""Profile service.

Profiles are keyed by the auth subject id and created on first
authentication.  Skills, education and links live in child tables; edits
sync them by diff (insert what is new, then delete what is gone) so unchanged
rows are never rewritten and readers never see an empty collection mid-edit.
"""

from __future__ import annotations

import logging
from typing import Any

from postgrest.exceptions import APIError

from gigmarket.core.config import settings
from gigmarket.core.constants import UNIQUE_VIOLATION_CODE
from gigmarket.core.exceptions import NotFoundError
from gigmarket.db.supabase import get_supabase
from gigmarket.models.enums import LinkPlatform
from gigmarket.models.profile import (
    EducationEntry,
    Profile,
    ProfileDetail,
    ProfileUpdate,
)

logger = logging.getLogger(__name__)


def default_username(address: str | None) -> str | None:
    """Derive ``user_<hex>`` from a wallet address (chars 2-8)."""
    if not address or len(address) < 8:
        return None
    return f"user_{address[2:8]}"


def _to_profile(row: dict[str, Any]) -> Profile:
    data = dict(row)
    data["credits"] = max(0, data.get("credits") or 0)
    return Profile(**data)


def _fetch_profile_row(user_id: str) -> dict[str, Any] | None:
    client = get_supabase()
    result = (
        client.table("profiles")
        .select("*")
        .eq("id", user_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        return None
    return result.data[0]


# ---------------------------------------------------------------------------
# Profile rows
# ---------------------------------------------------------------------------

def ensure_profile(user_id: str, address: str | None = None) -> Profile:
    """Return the caller's profile, creating it on first authentication."""
    row = _fetch_profile_row(user_id)
    if row is not None:
        return _to_profile(row)

    client = get_supabase()
    try:
        result = (
            client.table("profiles")
            .insert({
                "id": user_id,
                "username": default_username(address),
                "address": address,
                "credits": settings.DEFAULT_PROFILE_CREDITS,
            })
            .execute()
        )
    except APIError as exc:
        if exc.code != UNIQUE_VIOLATION_CODE:
            raise
        # A concurrent first request created the row.
        row = _fetch_profile_row(user_id)
        if row is None:
            raise
        return _to_profile(row)
    logger.info("profile_created", extra={"user_id": user_id})
    return _to_profile(result.data[0])


def get_profile(user_id: str) -> Profile:
    row = _fetch_profile_row(user_id)
    if row is None:
        raise NotFoundError(f"Profile not found: {user_id}")
    return _to_profile(row)


def update_profile_fields(user_id: str, fields: dict[str, Any]) -> Profile:
    """Write scalar profile columns and return the updated profile."""
    client = get_supabase()
    result = client.table("profiles").update(fields).eq("id", user_id).execute()
    if not result.data:
        raise NotFoundError(f"Profile not found: {user_id}")
    return _to_profile(result.data[0])


def add_credits(user_id: str, amount: int) -> int:
    """Add *amount* (may be negative) to the profile's credits; floor at 0.

    Returns the new balance.
    """
    profile = get_profile(user_id)
    new_balance = max(0, profile.credits + amount)
    update_profile_fields(user_id, {"credits": new_balance})
    logger.info(
        "credits_updated",
        extra={"user_id": user_id, "delta": amount, "balance": new_balance},
    )
    return new_balance


# ---------------------------------------------------------------------------
# Child collections
# ---------------------------------------------------------------------------

def _fetch_children(table: str, user_id: str) -> list[dict[str, Any]]:
    client = get_supabase()
    result = (
        client.table(table)
        .select("*")
        .eq("user_id", user_id)
        .order("created_at")
        .execute()
    )
    return result.data or []


def _apply_diff(
    table: str,
    to_insert: list[dict[str, Any]],
    to_delete: list[str],
) -> None:
    client = get_supabase()
    if to_insert:
        client.table(table).insert(to_insert).execute()
    if to_delete:
        client.table(table).delete().in_("id", to_delete).execute()


def sync_skills(user_id: str, desired: list[str]) -> None:
    rows = _fetch_children("skills", user_id)
    kept: set[str] = set()
    to_delete: list[str] = []
    for row in rows:
        skill = row.get("skill")
        if skill in desired and skill not in kept:
            kept.add(skill)
        else:
            to_delete.append(row["id"])
    to_insert = [
        {"user_id": user_id, "skill": skill} for skill in desired if skill not in kept
    ]
    _apply_diff("skills", to_insert, to_delete)


def sync_education(user_id: str, desired: list[EducationEntry]) -> None:
    rows = _fetch_children("education", user_id)
    unmatched = list(rows)
    to_insert: list[dict[str, Any]] = []
    for entry in desired:
        match = next(
            (
                row for row in unmatched
                if (row.get("degree"), row.get("institution"), row.get("year")) == entry.key()
            ),
            None,
        )
        if match is not None:
            unmatched.remove(match)
        else:
            to_insert.append({"user_id": user_id, **entry.model_dump()})
    _apply_diff("education", to_insert, [row["id"] for row in unmatched])


def sync_links(user_id: str, desired: dict[LinkPlatform, str]) -> None:
    """Keep one row per platform; an empty or missing URL removes the platform."""
    rows = _fetch_children("links", user_id)
    wanted = {
        platform.value: url.strip()
        for platform, url in desired.items()
        if url and url.strip()
    }

    client = get_supabase()
    seen: set[str] = set()
    to_delete: list[str] = []
    for row in rows:
        platform = row.get("platform")
        if platform not in wanted or platform in seen:
            to_delete.append(row["id"])
            continue
        seen.add(platform)
        if row.get("url") != wanted[platform]:
            client.table("links").update({"url": wanted[platform]}).eq("id", row["id"]).execute()

    to_insert = [
        {"user_id": user_id, "platform": platform, "url": url}
        for platform, url in wanted.items()
        if platform not in seen
    ]
    _apply_diff("links", to_insert, to_delete)


# ---------------------------------------------------------------------------
# Detail view and edits
# ---------------------------------------------------------------------------

def get_profile_detail(user_id: str) -> ProfileDetail:
    """Return the profile with skills, education and links."""
    profile = get_profile(user_id)
    skills = [row["skill"] for row in _fetch_children("skills", user_id)]
    education = [
        EducationEntry(
            degree=row["degree"],
            institution=row["institution"],
            year=row["year"],
        )
        for row in _fetch_children("education", user_id)
    ]
    links: dict[LinkPlatform, str] = {}
    for row in _fetch_children("links", user_id):
        try:
            platform = LinkPlatform(row["platform"])
        except ValueError:
            logger.warning(
                "unknown_link_platform",
                extra={"user_id": user_id, "platform": row.get("platform")},
            )
            continue
        links.setdefault(platform, row["url"])

    return ProfileDetail(
        **profile.model_dump(),
        skills=skills,
        education=education,
        links=links,
    )


def update_profile(user_id: str, payload: ProfileUpdate) -> ProfileDetail:
    """Apply a profile edit.  Collections left as ``None`` are not touched."""
    fields: dict[str, Any] = {}
    if payload.username is not None:
        fields["username"] = payload.username.strip()
    if payload.bio is not None:
        fields["bio"] = payload.bio
    if fields:
        update_profile_fields(user_id, fields)
    else:
        get_profile(user_id)

    if payload.skills is not None:
        sync_skills(user_id, payload.skills)
    if payload.education is not None:
        sync_education(user_id, payload.education)
    if payload.links is not None:
        sync_links(user_id, payload.links)

    logger.info(
        "profile_updated",
        extra={"user_id": user_id, "fields": sorted(fields)},
    )
    return get_profile_detail(user_id)
