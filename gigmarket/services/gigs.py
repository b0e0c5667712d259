"""Gig posting and listing service.

Posting inserts an ``open`` gig for the caller.  Listing fetches the full
open-gig set (no server-side pagination) and filtering is a pure projection
over that set, so it can be re-run on any fetched list.
"""

from __future__ import annotations

import logging
from typing import Any

from gigmarket.core.exceptions import NotFoundError
from gigmarket.db.supabase import get_supabase
from gigmarket.models.enums import GigStatus
from gigmarket.models.gig import Gig, GigCreate, GigWithCreator

logger = logging.getLogger(__name__)

GIG_WITH_CREATOR_SELECT = "*, creator:profiles!created_by(username, avatar_url)"


# ---------------------------------------------------------------------------
# Posting
# ---------------------------------------------------------------------------

def create_gig(creator_id: str, payload: GigCreate) -> Gig:
    """Insert a new gig owned by *creator_id* with status ``open``.

    *payload* has already passed the posting rules, so a gig below the
    credit minimum can never reach this insert.
    """
    client = get_supabase()
    row = {
        "title": payload.title,
        "description": payload.description,
        "category": payload.category.value,
        "credits": payload.credits,
        "created_by": creator_id,
        "status": GigStatus.open.value,
        "assigned_to": None,
    }
    result = client.table("gigs").insert(row).execute()
    gig = Gig(**result.data[0])

    logger.info(
        "gig_created",
        extra={
            "gig_id": str(gig.id),
            "created_by": creator_id,
            "credits": gig.credits,
        },
    )
    return gig


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def _to_gig_with_creator(row: dict[str, Any]) -> GigWithCreator:
    return GigWithCreator(**row)


def list_open_gigs() -> list[GigWithCreator]:
    """Return every open gig joined with creator display fields, newest first."""
    client = get_supabase()
    result = (
        client.table("gigs")
        .select(GIG_WITH_CREATOR_SELECT)
        .eq("status", GigStatus.open.value)
        .order("created_at", desc=True)
        .execute()
    )
    return [_to_gig_with_creator(row) for row in result.data or []]


def fetch_gig_row(gig_id: str) -> dict[str, Any] | None:
    """Return the raw ``gigs`` row for *gig_id*, or None."""
    client = get_supabase()
    result = (
        client.table("gigs")
        .select(GIG_WITH_CREATOR_SELECT)
        .eq("id", gig_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        return None
    return result.data[0]


def get_gig(gig_id: str) -> GigWithCreator:
    """Return a single gig with its creator.  Raises ``NotFoundError``."""
    row = fetch_gig_row(gig_id)
    if row is None:
        raise NotFoundError(f"Gig not found: {gig_id}")
    return _to_gig_with_creator(row)


def list_gigs_created_by(user_id: str) -> list[Gig]:
    client = get_supabase()
    result = (
        client.table("gigs")
        .select("*")
        .eq("created_by", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return [Gig(**row) for row in result.data or []]


def list_gigs_assigned_to(user_id: str) -> list[Gig]:
    client = get_supabase()
    result = (
        client.table("gigs")
        .select("*")
        .eq("assigned_to", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return [Gig(**row) for row in result.data or []]


# ---------------------------------------------------------------------------
# Pure projections
# ---------------------------------------------------------------------------

def filter_gigs(
    gigs: list[GigWithCreator],
    search_term: str | None = None,
    category: str | None = None,
) -> list[GigWithCreator]:
    """Filter *gigs* by search term and category.

    The search term is matched case-insensitively as a substring of the title
    or the description.  The category must match exactly.  Empty values
    disable the corresponding filter.
    """
    result = gigs
    if search_term:
        needle = search_term.lower()
        result = [
            gig
            for gig in result
            if needle in gig.title.lower() or needle in gig.description.lower()
        ]
    if category:
        result = [gig for gig in result if gig.category == category]
    return result


def available_categories(gigs: list[GigWithCreator]) -> list[str]:
    """Return the distinct categories present in *gigs*, in first-seen order."""
    return list(dict.fromkeys(gig.category for gig in gigs))


def mark_owned(gigs: list[GigWithCreator], user_id: str | None) -> list[GigWithCreator]:
    """Flag the gigs created by *user_id*."""
    if not user_id:
        return gigs
    return [
        gig.model_copy(update={"is_mine": str(gig.created_by) == user_id})
        for gig in gigs
    ]
