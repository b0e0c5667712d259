"""Dashboard endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from gigmarket.models.dashboard import Dashboard
from gigmarket.routers.deps import CurrentSession
from gigmarket.services.dashboard import get_dashboard

router = APIRouter()


@router.get("", response_model=Dashboard)
async def dashboard(session: CurrentSession) -> Dashboard:
    return get_dashboard(session.user_id)
