"""Gig endpoints: posting, listing with filters, detail, categories."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Query

from gigmarket.core.constants import GIG_CATEGORIES
from gigmarket.models.gig import Gig, GigCreate, GigDetailResponse, GigListResponse
from gigmarket.routers.deps import CurrentSession, OptionalSession
from gigmarket.services.applications import get_own_application
from gigmarket.services.gigs import (
    available_categories,
    create_gig,
    filter_gigs,
    get_gig,
    list_open_gigs,
    mark_owned,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=Gig, status_code=201)
async def post_gig(payload: GigCreate, session: CurrentSession) -> Gig:
    """Post a gig as the signed-in user.  It starts ``open`` and unassigned."""
    return create_gig(session.user_id, payload)


@router.get("", response_model=GigListResponse)
async def browse_gigs(
    session: OptionalSession,
    search: str | None = Query(
        default=None,
        description="Case-insensitive match on title or description",
    ),
    category: str | None = Query(default=None, description="Exact category"),
) -> GigListResponse:
    """Return open gigs, newest first, filtered by search term and category."""
    gigs = list_open_gigs()
    gigs = mark_owned(gigs, session.user_id if session else None)
    filtered = filter_gigs(gigs, search, category)
    return GigListResponse(
        gigs=filtered,
        total=len(filtered),
        categories=available_categories(gigs),
    )


@router.get("/categories", response_model=list[str])
async def gig_categories() -> list[str]:
    """Return the categories accepted when posting a gig."""
    return GIG_CATEGORIES


@router.get("/{gig_id}", response_model=GigDetailResponse)
async def gig_detail(gig_id: UUID, session: OptionalSession) -> GigDetailResponse:
    gig = get_gig(str(gig_id))
    my_status = None
    if session:
        gig = mark_owned([gig], session.user_id)[0]
        application = get_own_application(str(gig_id), session.user_id)
        if application is not None:
            my_status = application.status
    return GigDetailResponse(gig=gig, my_application_status=my_status)
