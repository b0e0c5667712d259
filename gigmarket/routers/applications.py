"""Application endpoints, nested under a gig.

Submission (full and quick apply), the caller's own status, and the owner's
review actions: list, accept, reject.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter

from gigmarket.core.exceptions import NotFoundError
from gigmarket.models.application import (
    AcceptResult,
    Application,
    ApplicationCreate,
    ApplicationWithApplicant,
)
from gigmarket.routers.deps import CurrentSession
from gigmarket.services.applications import (
    accept_application,
    get_own_application,
    list_applications_for_gig,
    quick_apply,
    reject_application,
    submit_application,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{gig_id}/applications", response_model=Application, status_code=201)
async def apply_to_gig(
    gig_id: UUID,
    payload: ApplicationCreate,
    session: CurrentSession,
) -> Application:
    return submit_application(str(gig_id), session.user_id, payload.cover_letter)


@router.post("/{gig_id}/applications/quick", response_model=Application, status_code=201)
async def quick_apply_to_gig(gig_id: UUID, session: CurrentSession) -> Application:
    """Apply with the standard cover letter."""
    return quick_apply(str(gig_id), session.user_id)


@router.get("/{gig_id}/applications/mine", response_model=Application)
async def my_application(gig_id: UUID, session: CurrentSession) -> Application:
    application = get_own_application(str(gig_id), session.user_id)
    if application is None:
        raise NotFoundError("You have not applied for this gig")
    return application


@router.get("/{gig_id}/applications", response_model=list[ApplicationWithApplicant])
async def gig_applications(
    gig_id: UUID,
    session: CurrentSession,
) -> list[ApplicationWithApplicant]:
    """List applications for a gig.  Only its creator may call this."""
    return list_applications_for_gig(str(gig_id), session.user_id)


@router.post(
    "/{gig_id}/applications/{application_id}/accept",
    response_model=AcceptResult,
)
async def accept(gig_id: UUID, application_id: UUID, session: CurrentSession) -> AcceptResult:
    """Accept an application: the gig is assigned and every sibling rejected.

    Returns 409 if the gig is no longer open, including when a concurrent
    accept won.
    """
    return accept_application(str(gig_id), str(application_id), session.user_id)


@router.post(
    "/{gig_id}/applications/{application_id}/reject",
    response_model=Application,
)
async def reject(gig_id: UUID, application_id: UUID, session: CurrentSession) -> Application:
    return reject_application(str(gig_id), str(application_id), session.user_id)
