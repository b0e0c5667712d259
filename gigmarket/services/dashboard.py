"""Dashboard aggregation for the signed-in user."""

from __future__ import annotations

from gigmarket.models.dashboard import Dashboard
from gigmarket.services.applications import list_applications_for_user
from gigmarket.services.gigs import list_gigs_assigned_to, list_gigs_created_by
from gigmarket.services.mining import get_status
from gigmarket.services.profiles import get_profile


def get_dashboard(user_id: str) -> Dashboard:
    """Credits, gigs posted, gigs being worked on, applications and mining."""
    profile = get_profile(user_id)
    return Dashboard(
        credits=profile.credits,
        posted_gigs=list_gigs_created_by(user_id),
        assigned_gigs=list_gigs_assigned_to(user_id),
        applications=list_applications_for_user(user_id),
        mining=get_status(user_id),
    )
