"""Per-gig concurrency locks using threading.Lock.

Serializes state transitions on a single gig within this process.  Uses a
non-blocking acquire: if the gig's lock is already held, the caller gets
False and reports a conflict instead of waiting.

Cross-process safety comes from the compare-and-set updates in the
application service; these locks only stop one process from racing itself.
"""

from __future__ import annotations

import threading

_registry_lock = threading.Lock()
_gig_locks: dict[str, threading.Lock] = {}


def acquire_gig_lock(gig_id: str) -> bool:
    """Try to acquire the lock for *gig_id*.

    Returns True if the lock was acquired, False if already held.
    """
    with _registry_lock:
        lock = _gig_locks.get(gig_id)
        if lock is None:
            lock = threading.Lock()
            _gig_locks[gig_id] = lock
        return lock.acquire(blocking=False)


def release_gig_lock(gig_id: str) -> None:
    """Release the lock for *gig_id* and drop it from the registry.

    Safe to call even if the lock is not held.
    """
    with _registry_lock:
        lock = _gig_locks.pop(gig_id, None)
    if lock is not None and lock.locked():
        lock.release()


def is_gig_locked(gig_id: str) -> bool:
    """Check if a transition on *gig_id* is currently in progress."""
    with _registry_lock:
        lock = _gig_locks.get(gig_id)
    return lock is not None and lock.locked()
