"""Escrow endpoints.

Standalone create/release/list; not called by the gig workflow.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter

from gigmarket.models.escrow import Escrow, EscrowCreate
from gigmarket.routers.deps import CurrentSession
from gigmarket.services.escrow import create_escrow, list_escrows, release_escrow

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=Escrow, status_code=201)
async def open_escrow(payload: EscrowCreate, session: CurrentSession) -> Escrow:
    return create_escrow(session.user_id, payload)


@router.post("/{escrow_id}/release", response_model=Escrow)
async def release(escrow_id: UUID, session: CurrentSession) -> Escrow:
    """Release a pending escrow the caller opened."""
    return release_escrow(str(escrow_id), session.user_id)


@router.get("", response_model=list[Escrow])
async def my_escrows(session: CurrentSession) -> list[Escrow]:
    return list_escrows(session.user_id)
