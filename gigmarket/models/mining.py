"""Pydantic models for the simulated mining feature."""

from datetime import datetime

from pydantic import BaseModel


class MiningStatus(BaseModel):
    """Snapshot of a user's current mining session."""
    active: bool
    progress: int = 0
    estimated_eth: float = 0.0
    estimated_credits: int = 0
    hash_rate_mhs: float = 0.0
    started_at: datetime | None = None
    completes_at: datetime | None = None


class MiningStats(BaseModel):
    """Historical totals kept in process memory."""
    completed_sessions: int = 0
    total_credits_earned: int = 0
    last_completed_at: datetime | None = None
