"""Pydantic models for the ``escrow`` table."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gigmarket.models.enums import EscrowStatus


class EscrowCreate(BaseModel):
    """Payload for opening an escrow on a gig."""
    gig_id: UUID
    amount: int = Field(gt=0)


class Escrow(BaseModel):
    """Full escrow record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    gig_id: UUID | None = None
    client_id: UUID | None = None
    amount: int
    status: EscrowStatus = EscrowStatus.pending
    created_at: datetime | None = None
    updated_at: datetime | None = None
