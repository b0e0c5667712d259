"""Simulated mining sessions.

A session is one cycle of ``MINING_CYCLE_TICKS`` ticks.  Progress and
estimated earnings grow linearly with elapsed time; completion is a one-shot
APScheduler job that credits the full-cycle reward to the profile.
Stopping early cancels the job and earns nothing.

Sessions and totals live in process memory only.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_FLOOR, Decimal

from gigmarket.core.config import settings
from gigmarket.core.constants import (
    ETH_TO_CREDITS_RATE,
    MINING_CYCLE_REWARD_ETH,
    MINING_CYCLE_TICKS,
    MINING_HASH_RATE_MHS,
)
from gigmarket.core.exceptions import ConflictError, NotFoundError
from gigmarket.models.mining import MiningStats, MiningStatus
from gigmarket.scheduler.jobs import cancel_job, schedule_once
from gigmarket.services.profiles import add_credits

logger = logging.getLogger(__name__)


@dataclass
class _Session:
    user_id: str
    started_at: datetime
    completes_at: datetime


_lock = threading.Lock()
_sessions: dict[str, _Session] = {}
_stats: dict[str, MiningStats] = {}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _job_id(user_id: str) -> str:
    return f"mining:{user_id}"


def cycle_duration() -> timedelta:
    return timedelta(seconds=MINING_CYCLE_TICKS * settings.MINING_TICK_SECONDS)


def eth_for_progress(progress: int) -> Decimal:
    """Estimated ETH earned at *progress* percent of a cycle."""
    return Decimal(progress) * Decimal(str(MINING_CYCLE_REWARD_ETH)) / 100


def credits_for_eth(eth: Decimal) -> int:
    """Convert ETH to platform credits, rounding down."""
    return int((eth * ETH_TO_CREDITS_RATE).to_integral_value(rounding=ROUND_FLOOR))


def _progress(session: _Session, now: datetime) -> int:
    elapsed = (now - session.started_at).total_seconds()
    total = cycle_duration().total_seconds()
    if total <= 0:
        return 100
    return max(0, min(100, int(elapsed / total * 100)))


def _status_for(session: _Session | None, now: datetime) -> MiningStatus:
    if session is None:
        return MiningStatus(active=False)
    progress = _progress(session, now)
    eth = eth_for_progress(progress)
    return MiningStatus(
        active=True,
        progress=progress,
        estimated_eth=float(eth),
        estimated_credits=credits_for_eth(eth),
        hash_rate_mhs=MINING_HASH_RATE_MHS,
        started_at=session.started_at,
        completes_at=session.completes_at,
    )


def start_session(user_id: str, now: datetime | None = None) -> MiningStatus:
    """Start a mining cycle.  One active session per user."""
    now = now or _now()
    with _lock:
        if user_id in _sessions:
            raise ConflictError("A mining session is already active")
        session = _Session(
            user_id=user_id,
            started_at=now,
            completes_at=now + cycle_duration(),
        )
        _sessions[user_id] = session

    try:
        schedule_once(_job_id(user_id), session.completes_at, complete_session, [user_id])
    except Exception:
        with _lock:
            _sessions.pop(user_id, None)
        raise
    logger.info("mining_started", extra={"user_id": user_id})
    return _status_for(session, now)


def get_status(user_id: str, now: datetime | None = None) -> MiningStatus:
    with _lock:
        session = _sessions.get(user_id)
    return _status_for(session, now or _now())


def stop_session(user_id: str) -> MiningStatus:
    """Abort the active session.  Progress is discarded."""
    with _lock:
        session = _sessions.pop(user_id, None)
    if session is None:
        raise NotFoundError("No active mining session")
    cancel_job(_job_id(user_id))
    logger.info("mining_stopped", extra={"user_id": user_id})
    return MiningStatus(active=False)


def complete_session(user_id: str, now: datetime | None = None) -> int:
    """Finish the user's cycle and credit the reward.

    Returns the credits awarded; 0 if the session was stopped meanwhile.
    """
    with _lock:
        session = _sessions.pop(user_id, None)
    if session is None:
        return 0

    reward = credits_for_eth(eth_for_progress(100))
    add_credits(user_id, reward)

    with _lock:
        stats = _stats.setdefault(user_id, MiningStats())
        stats.completed_sessions += 1
        stats.total_credits_earned += reward
        stats.last_completed_at = now or _now()

    logger.info(
        "mining_completed",
        extra={"user_id": user_id, "credits_awarded": reward},
    )
    return reward


def get_stats(user_id: str) -> MiningStats:
    with _lock:
        stats = _stats.get(user_id)
        return stats.model_copy() if stats else MiningStats()
