"""Escrow service.

Records funds nominally held against a gig.  Creation and release are
standalone operations: nothing in the gig or application workflow calls
them, and no funds actually move.
"""

from __future__ import annotations

import logging

from gigmarket.core.exceptions import ConflictError, NotFoundError
from gigmarket.db.supabase import get_supabase
from gigmarket.models.enums import EscrowStatus
from gigmarket.models.escrow import Escrow, EscrowCreate

logger = logging.getLogger(__name__)


def create_escrow(client_id: str, payload: EscrowCreate) -> Escrow:
    """Insert a pending escrow row with the caller as client."""
    client = get_supabase()
    result = (
        client.table("escrow")
        .insert({
            "gig_id": str(payload.gig_id),
            "client_id": client_id,
            "amount": payload.amount,
            "status": EscrowStatus.pending.value,
        })
        .execute()
    )
    escrow = Escrow(**result.data[0])
    logger.info(
        "escrow_created",
        extra={
            "escrow_id": str(escrow.id),
            "gig_id": str(payload.gig_id),
            "amount": payload.amount,
        },
    )
    return escrow


def release_escrow(escrow_id: str, client_id: str) -> Escrow:
    """Flip a pending escrow owned by *client_id* to ``released``.

    Rows belonging to other clients are invisible: releasing one reports
    not found rather than forbidden.
    """
    client = get_supabase()
    result = (
        client.table("escrow")
        .update({"status": EscrowStatus.released.value})
        .eq("id", escrow_id)
        .eq("client_id", client_id)
        .eq("status", EscrowStatus.pending.value)
        .execute()
    )
    if result.data:
        logger.info("escrow_released", extra={"escrow_id": escrow_id})
        return Escrow(**result.data[0])

    existing = (
        client.table("escrow")
        .select("status")
        .eq("id", escrow_id)
        .eq("client_id", client_id)
        .limit(1)
        .execute()
    )
    if not existing.data:
        raise NotFoundError(f"Escrow not found: {escrow_id}")
    raise ConflictError(f"Escrow is already {existing.data[0]['status']}")


def list_escrows(client_id: str) -> list[Escrow]:
    client = get_supabase()
    result = (
        client.table("escrow")
        .select("*")
        .eq("client_id", client_id)
        .order("created_at", desc=True)
        .execute()
    )
    return [Escrow(**row) for row in result.data or []]
