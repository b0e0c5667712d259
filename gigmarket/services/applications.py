"""Application submission and review service.

Applications move ``pending -> accepted | rejected``.  Accepting one
application assigns the gig and rejects every sibling; the steps are issued
as compare-and-set updates (``UPDATE ... WHERE status = expected``) so a lost
race changes nothing, and each applied step registers an undo action that
runs in reverse order if a later step fails.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from postgrest.exceptions import APIError

from gigmarket.core.constants import QUICK_APPLY_COVER_LETTER, UNIQUE_VIOLATION_CODE
from gigmarket.core.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    WorkflowInconsistentError,
)
from gigmarket.core.locks import acquire_gig_lock, release_gig_lock
from gigmarket.db.supabase import get_supabase
from gigmarket.models.application import (
    AcceptResult,
    ApplicantSummary,
    Application,
    ApplicationWithApplicant,
)
from gigmarket.models.enums import ApplicationStatus, GigStatus
from gigmarket.models.gig import Gig
from gigmarket.services.gigs import fetch_gig_row

logger = logging.getLogger(__name__)

APPLICANT_SELECT = (
    "*, applicant:profiles!user_id(username, avatar_url, bio, reputation, skills(skill))"
)


# ---------------------------------------------------------------------------
# Row helpers
# ---------------------------------------------------------------------------

def _fetch_application_row(application_id: str) -> dict[str, Any] | None:
    client = get_supabase()
    result = (
        client.table("applications")
        .select("*")
        .eq("id", application_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        return None
    return result.data[0]


def _require_gig_row(gig_id: str) -> dict[str, Any]:
    row = fetch_gig_row(gig_id)
    if row is None:
        raise NotFoundError(f"Gig not found: {gig_id}")
    return row


def _require_owner(gig_row: dict[str, Any], caller_id: str) -> None:
    if str(gig_row.get("created_by")) != caller_id:
        raise PermissionDeniedError(
            "You can only manage applications for gigs you've created"
        )


def _require_application_of_gig(application_id: str, gig_id: str) -> dict[str, Any]:
    row = _fetch_application_row(application_id)
    if row is None or str(row.get("gig_id")) != gig_id:
        raise NotFoundError("Application not found for this gig")
    return row


def _compare_and_set(
    table: str,
    row_id: str,
    expected_status: str,
    updates: dict[str, Any],
    **extra_filters: Any,
) -> dict[str, Any] | None:
    """Apply *updates* only if the row still has *expected_status*.

    Returns the updated row, or None when no row matched (the row is gone
    or its status changed underneath us).
    """
    client = get_supabase()
    query = (
        client.table(table)
        .update(updates)
        .eq("id", row_id)
        .eq("status", expected_status)
    )
    for column, value in extra_filters.items():
        query = query.eq(column, value)
    result = query.execute()
    if result.data:
        return result.data[0]
    return None


def _revert(
    table: str,
    row_id: str,
    expected_status: str,
    updates: dict[str, Any],
    **extra_filters: Any,
) -> dict[str, Any]:
    """Compare-and-set used as an undo; a row that no longer matches is a failure."""
    row = _compare_and_set(table, row_id, expected_status, updates, **extra_filters)
    if row is None:
        raise ConflictError(
            f"Cannot undo {table} {row_id}: status is no longer {expected_status}"
        )
    return row


class _TransitionLog:
    """Undo actions for the applied steps of one transition."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._steps: list[tuple[str, Callable[[], Any]]] = []

    def record(self, step: str, undo: Callable[[], Any]) -> None:
        self._steps.append((step, undo))

    def rollback(self) -> None:
        """Run undo actions newest first.

        Raises ``WorkflowInconsistentError`` listing the steps whose effects
        could not be undone.
        """
        stuck: list[str] = []
        for step, undo in reversed(self._steps):
            try:
                undo()
            except Exception as exc:
                stuck.append(step)
                logger.error(
                    "transition_undo_failed",
                    extra={
                        "transition": self.name,
                        "step": step,
                        "error_message": str(exc),
                    },
                )
        self._steps.clear()
        if stuck:
            raise WorkflowInconsistentError(
                f"{self.name} failed and could not be fully undone",
                applied_steps=list(reversed(stuck)),
            )


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------

def get_own_application(gig_id: str, user_id: str) -> Application | None:
    """Return *user_id*'s application for *gig_id*, if any."""
    client = get_supabase()
    result = (
        client.table("applications")
        .select("*")
        .eq("gig_id", gig_id)
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        return None
    return Application(**result.data[0])


def submit_application(gig_id: str, user_id: str, cover_letter: str) -> Application:
    """Apply to an open gig with a cover letter.

    The existence check before the insert catches sequential duplicates.
    Concurrent duplicates are caught by the unique index on
    ``applications(gig_id, user_id)`` when the schema has it.
    """
    if not cover_letter.strip():
        raise InvalidInputError("Cover letter is required")

    gig_row = _require_gig_row(gig_id)
    if str(gig_row.get("created_by")) == user_id:
        raise PermissionDeniedError("You cannot apply to your own gig")
    if gig_row.get("status") != GigStatus.open.value:
        raise ConflictError("This gig is no longer accepting applications")

    if get_own_application(gig_id, user_id) is not None:
        raise ConflictError("You have already applied for this gig")

    client = get_supabase()
    try:
        result = (
            client.table("applications")
            .insert({
                "gig_id": gig_id,
                "user_id": user_id,
                "cover_letter": cover_letter,
                "status": ApplicationStatus.pending.value,
            })
            .execute()
        )
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION_CODE:
            raise ConflictError("You have already applied for this gig") from exc
        raise

    application = Application(**result.data[0])
    logger.info(
        "application_submitted",
        extra={
            "application_id": str(application.id),
            "gig_id": gig_id,
            "user_id": user_id,
        },
    )
    return application


def quick_apply(gig_id: str, user_id: str) -> Application:
    """Apply with the canned cover letter."""
    return submit_application(gig_id, user_id, QUICK_APPLY_COVER_LETTER)


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------

def _to_application_with_applicant(row: dict[str, Any]) -> ApplicationWithApplicant:
    data = dict(row)
    raw_applicant = data.pop("applicant", None)
    applicant: ApplicantSummary | None = None
    if isinstance(raw_applicant, dict):
        skills = [
            s["skill"]
            for s in raw_applicant.get("skills") or []
            if isinstance(s, dict) and s.get("skill")
        ]
        applicant = ApplicantSummary(
            username=raw_applicant.get("username"),
            avatar_url=raw_applicant.get("avatar_url"),
            bio=raw_applicant.get("bio"),
            reputation=raw_applicant.get("reputation"),
            skills=skills,
        )
    return ApplicationWithApplicant(**data, applicant=applicant)


def list_applications_for_gig(
    gig_id: str,
    caller_id: str,
) -> list[ApplicationWithApplicant]:
    """Return the applications of a gig, newest first.  Owner only."""
    gig_row = _require_gig_row(gig_id)
    _require_owner(gig_row, caller_id)

    client = get_supabase()
    result = (
        client.table("applications")
        .select(APPLICANT_SELECT)
        .eq("gig_id", gig_id)
        .order("created_at", desc=True)
        .execute()
    )
    return [_to_application_with_applicant(row) for row in result.data or []]


def list_applications_for_user(user_id: str) -> list[Application]:
    client = get_supabase()
    result = (
        client.table("applications")
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return [Application(**row) for row in result.data or []]


def accept_application(gig_id: str, application_id: str, caller_id: str) -> AcceptResult:
    """Accept one application, assign the gig and reject all siblings.

    Order: gig first (the contended resource), then the application, then
    the siblings.  If the gig compare-and-set matches no row, another accept
    won and nothing has been written.
    """
    gig_row = _require_gig_row(gig_id)
    _require_owner(gig_row, caller_id)
    if gig_row.get("status") != GigStatus.open.value:
        raise ConflictError("Gig already assigned")

    app_row = _require_application_of_gig(application_id, gig_id)
    if app_row.get("status") != ApplicationStatus.pending.value:
        raise ConflictError(f"Application is already {app_row.get('status')}")
    applicant_id = str(app_row["user_id"])

    if not acquire_gig_lock(gig_id):
        raise ConflictError("Another transition on this gig is in progress")

    log = _TransitionLog("accept_application")
    try:
        # Step 1: gig open -> assigned
        updated_gig = _compare_and_set(
            "gigs",
            gig_id,
            expected_status=GigStatus.open.value,
            updates={"status": GigStatus.assigned.value, "assigned_to": applicant_id},
        )
        if updated_gig is None:
            logger.warning(
                "accept_lost_race",
                extra={"gig_id": gig_id, "application_id": application_id},
            )
            raise ConflictError("Gig already assigned")
        log.record(
            "assign_gig",
            lambda: _revert(
                "gigs",
                gig_id,
                expected_status=GigStatus.assigned.value,
                updates={"status": GigStatus.open.value, "assigned_to": None},
                assigned_to=applicant_id,
            ),
        )

        # Step 2: application pending -> accepted
        updated_app = _compare_and_set(
            "applications",
            application_id,
            expected_status=ApplicationStatus.pending.value,
            updates={"status": ApplicationStatus.accepted.value},
        )
        if updated_app is None:
            raise ConflictError("Application is no longer pending")
        log.record(
            "accept_application",
            lambda: _revert(
                "applications",
                application_id,
                expected_status=ApplicationStatus.accepted.value,
                updates={"status": ApplicationStatus.pending.value},
            ),
        )

        # Step 3: every sibling -> rejected
        client = get_supabase()
        rejected = (
            client.table("applications")
            .update({"status": ApplicationStatus.rejected.value})
            .eq("gig_id", gig_id)
            .neq("id", application_id)
            .execute()
        )
    except Exception as exc:
        logger.error(
            "accept_application_failed",
            extra={
                "gig_id": gig_id,
                "application_id": application_id,
                "error_message": str(exc),
            },
        )
        log.rollback()
        raise
    finally:
        release_gig_lock(gig_id)

    rejected_count = len(rejected.data or [])
    logger.info(
        "application_accepted",
        extra={
            "gig_id": gig_id,
            "application_id": application_id,
            "assigned_to": applicant_id,
            "rejected_count": rejected_count,
        },
    )
    return AcceptResult(
        gig=Gig(**updated_gig),
        application=Application(**updated_app),
        rejected_count=rejected_count,
    )


def reject_application(gig_id: str, application_id: str, caller_id: str) -> Application:
    """Reject a pending application.  Owner only; the gig is not touched."""
    gig_row = _require_gig_row(gig_id)
    _require_owner(gig_row, caller_id)

    app_row = _require_application_of_gig(application_id, gig_id)
    if app_row.get("status") != ApplicationStatus.pending.value:
        raise ConflictError(f"Application is already {app_row.get('status')}")

    updated = _compare_and_set(
        "applications",
        application_id,
        expected_status=ApplicationStatus.pending.value,
        updates={"status": ApplicationStatus.rejected.value},
    )
    if updated is None:
        raise ConflictError("Application is no longer pending")

    logger.info(
        "application_rejected",
        extra={"gig_id": gig_id, "application_id": application_id},
    )
    return Application(**updated)
