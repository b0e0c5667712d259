"""Shared test fixtures.

Provides a ``test_client`` for FastAPI, mock and in-memory Supabase clients,
and an ``as_user`` fixture that swaps the authenticated caller.
"""

import os

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key")

from collections.abc import Callable, Generator
from contextlib import ExitStack
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from tests.fakes import FakeSupabase

# Every module that binds ``get_supabase`` at import time.
SUPABASE_CONSUMERS = (
    "gigmarket.services.gigs",
    "gigmarket.services.applications",
    "gigmarket.services.escrow",
    "gigmarket.services.profiles",
    "gigmarket.services.storage",
    "gigmarket.services.auth",
    "gigmarket.routers.health",
)


@pytest.fixture(autouse=True)
def reset_process_state() -> Generator[None, None, None]:
    """Clear in-memory mining sessions and gig locks between tests."""
    from gigmarket.core import locks
    from gigmarket.services import mining

    yield
    mining._sessions.clear()
    mining._stats.clear()
    locks._gig_locks.clear()


@pytest.fixture()
def mock_supabase_module() -> Generator[MagicMock, None, None]:
    """Patch the Supabase client at module level in the health router."""
    mock_client = MagicMock()
    # Mock the select -> limit -> execute chain
    mock_table = MagicMock()
    mock_select = MagicMock()
    mock_limit = MagicMock()

    mock_client.table.return_value = mock_table
    mock_table.select.return_value = mock_select
    mock_select.limit.return_value = mock_limit
    mock_limit.execute.return_value = MagicMock()  # non-None result

    with patch("gigmarket.routers.health.get_supabase", return_value=mock_client):
        yield mock_client


@pytest.fixture()
def mock_supabase_disconnected() -> Generator[MagicMock, None, None]:
    """Patch ``get_supabase`` to simulate a disconnected database."""
    with patch(
        "gigmarket.routers.health.get_supabase",
        side_effect=Exception("Connection refused"),
    ):
        yield MagicMock()


@pytest.fixture()
def fake_db() -> Generator[FakeSupabase, None, None]:
    """In-memory Supabase tables wired into every service module."""
    db = FakeSupabase(
        unique={
            "applications": [("gig_id", "user_id")],
            "profiles": [("id",)],
        }
    )
    with ExitStack() as stack:
        for module in SUPABASE_CONSUMERS:
            stack.enter_context(patch(f"{module}.get_supabase", return_value=db))
        yield db


@pytest.fixture()
def test_client() -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient."""
    from gigmarket.main import app

    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture()
def as_user() -> Callable[[str | None], str]:
    """Return a function that makes every request run as the given user.

    ``as_user()`` picks a fresh id; ``as_user(some_id)`` reuses one.  Only
    the token check is bypassed; profiles are still created on first use.
    """
    from gigmarket.main import app
    from gigmarket.models.session import SessionContext
    from gigmarket.routers.deps import optional_session, require_session
    from gigmarket.services.profiles import ensure_profile

    def _switch(user_id: str | None = None) -> str:
        user_id = user_id or str(uuid4())
        context = SessionContext(user_id=user_id, access_token=f"token-{user_id}")

        def _require() -> SessionContext:
            ensure_profile(user_id)
            return context

        app.dependency_overrides[require_session] = _require
        app.dependency_overrides[optional_session] = lambda: context
        return user_id

    return _switch
