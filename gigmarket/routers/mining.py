"""Simulated mining endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from gigmarket.models.mining import MiningStats, MiningStatus
from gigmarket.routers.deps import CurrentSession
from gigmarket.services.mining import get_stats, get_status, start_session, stop_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/start", response_model=MiningStatus)
async def start(session: CurrentSession) -> MiningStatus:
    """Start a mining cycle; credits are awarded when it completes."""
    return start_session(session.user_id)


@router.post("/stop", response_model=MiningStatus)
async def stop(session: CurrentSession) -> MiningStatus:
    return stop_session(session.user_id)


@router.get("/status", response_model=MiningStatus)
async def status(session: CurrentSession) -> MiningStatus:
    return get_status(session.user_id)


@router.get("/stats", response_model=MiningStats)
async def stats(session: CurrentSession) -> MiningStats:
    return get_stats(session.user_id)
