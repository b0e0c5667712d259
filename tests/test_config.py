"""Unit tests for configuration, Supabase client, scheduler helpers, and /health."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient


class TestSettings:
    """Settings loading via pydantic-settings."""

    def test_settings_loads_required_fields(self) -> None:
        """Given env vars are set, settings loads without error."""
        env_overrides = {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_KEY": "test-key-123",
            "ETH_RPC_URL": "https://rpc.example.org",
        }
        with patch.dict("os.environ", env_overrides, clear=False):
            from gigmarket.core.config import Settings

            s = Settings()  # type: ignore[call-arg]
            assert s.SUPABASE_URL == "https://test.supabase.co"
            assert s.SUPABASE_KEY == "test-key-123"
            assert s.ETH_RPC_URL == "https://rpc.example.org"

    def test_settings_defaults(self) -> None:
        """Given minimal env vars, defaults are applied correctly."""
        env_overrides = {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_KEY": "test-key",
        }
        with patch.dict("os.environ", env_overrides, clear=False):
            from gigmarket.core.config import Settings

            s = Settings(_env_file=None)  # type: ignore[call-arg]
            assert s.AVATAR_BUCKET == "avatars"
            assert s.RESUME_BUCKET == "resumes"
            assert s.DEFAULT_PROFILE_CREDITS == 100
            assert s.MINING_TICK_SECONDS == 0.5
            assert s.ALLOWED_ORIGINS == "*"
            assert s.LOG_LEVEL == "INFO"


class TestSupabaseClient:
    """Supabase singleton client and per-call auth clients."""

    def test_get_supabase_returns_client(self) -> None:
        """Given valid settings, get_supabase returns a Client."""
        mock_client = MagicMock()
        with patch("gigmarket.db.supabase.create_client", return_value=mock_client):
            # Reset singleton
            import gigmarket.db.supabase as supa_mod

            supa_mod._client = None
            client = supa_mod.get_supabase()
            assert client is mock_client
            supa_mod._client = None

    def test_get_supabase_is_singleton(self) -> None:
        """Given multiple calls, get_supabase returns the same instance."""
        mock_client = MagicMock()
        with patch("gigmarket.db.supabase.create_client", return_value=mock_client) as mock_create:
            import gigmarket.db.supabase as supa_mod

            supa_mod._client = None
            first = supa_mod.get_supabase()
            second = supa_mod.get_supabase()
            assert first is second
            mock_create.assert_called_once()
            supa_mod._client = None

    def test_auth_client_is_never_shared(self) -> None:
        """Each sign-in flow gets its own client."""
        with patch(
            "gigmarket.db.supabase.create_client",
            side_effect=lambda *_: MagicMock(),
        ):
            from gigmarket.db.supabase import create_auth_client

            assert create_auth_client() is not create_auth_client()


class TestScheduler:
    """One-shot job helpers on the shared BackgroundScheduler."""

    @patch("gigmarket.scheduler.jobs.scheduler")
    def test_start_scheduler_only_once(self, mock_scheduler: MagicMock) -> None:
        from gigmarket.scheduler.jobs import start_scheduler

        mock_scheduler.running = True
        start_scheduler()
        mock_scheduler.start.assert_not_called()

        mock_scheduler.running = False
        start_scheduler()
        mock_scheduler.start.assert_called_once()

    @patch("gigmarket.scheduler.jobs.scheduler")
    def test_schedule_once_replaces_existing(self, mock_scheduler: MagicMock) -> None:
        from gigmarket.scheduler.jobs import schedule_once

        run_at = datetime.now(timezone.utc) + timedelta(seconds=50)
        func = MagicMock()
        schedule_once("mining:abc", run_at, func, ["abc"])

        call = mock_scheduler.add_job.call_args
        assert call.args[0] is func
        assert call.kwargs["id"] == "mining:abc"
        assert call.kwargs["args"] == ["abc"]
        assert call.kwargs["replace_existing"] is True

    @patch("gigmarket.scheduler.jobs.scheduler")
    def test_cancel_missing_job_returns_false(self, mock_scheduler: MagicMock) -> None:
        from apscheduler.jobstores.base import JobLookupError

        from gigmarket.scheduler.jobs import cancel_job

        mock_scheduler.remove_job.side_effect = JobLookupError("mining:abc")
        assert cancel_job("mining:abc") is False

    @patch("gigmarket.scheduler.jobs.scheduler")
    def test_cancel_pending_job(self, mock_scheduler: MagicMock) -> None:
        from gigmarket.scheduler.jobs import cancel_job

        assert cancel_job("mining:abc") is True
        mock_scheduler.remove_job.assert_called_once_with("mining:abc")


class TestGigLocks:
    """Per-gig non-blocking locks."""

    def test_second_acquire_fails_until_released(self) -> None:
        from gigmarket.core.locks import acquire_gig_lock, is_gig_locked, release_gig_lock

        assert acquire_gig_lock("gig-1") is True
        assert acquire_gig_lock("gig-1") is False
        assert is_gig_locked("gig-1") is True
        assert acquire_gig_lock("gig-2") is True

        release_gig_lock("gig-1")
        release_gig_lock("gig-2")
        assert is_gig_locked("gig-1") is False

    def test_release_unheld_lock_is_noop(self) -> None:
        from gigmarket.core.locks import release_gig_lock

        release_gig_lock("never-locked")

    def test_released_locks_leave_the_registry(self) -> None:
        from gigmarket.core import locks

        for n in range(50):
            assert locks.acquire_gig_lock(f"gig-{n}") is True
            locks.release_gig_lock(f"gig-{n}")
        locks.release_gig_lock("never-locked")

        assert locks._gig_locks == {}

    def test_held_lock_stays_registered(self) -> None:
        from gigmarket.core import locks

        locks.acquire_gig_lock("gig-held")
        locks.acquire_gig_lock("gig-held")
        assert "gig-held" in locks._gig_locks

        locks.release_gig_lock("gig-held")
        assert locks.acquire_gig_lock("gig-held") is True


class TestHealthEndpoint:
    """GET /health reports database and scheduler state."""

    def test_health_connected(
        self, test_client: TestClient, mock_supabase_module: MagicMock
    ) -> None:
        """Given Supabase is reachable, /health returns database=connected."""
        response = test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "connected"
        assert body["scheduler"] == "running"
        mock_supabase_module.table.assert_called_with("profiles")

    def test_health_disconnected(
        self, test_client: TestClient, mock_supabase_disconnected: MagicMock
    ) -> None:
        """Given Supabase is unreachable, /health returns 503 with database=disconnected."""
        response = test_client.get("/health")
        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "degraded"
        assert body["database"] == "disconnected"


class TestLogging:
    """Structured logging configuration."""

    def test_setup_logging_configures_root_logger(self) -> None:
        """Given setup_logging is called, root logger has a handler."""
        import logging

        from gigmarket.core.logging import setup_logging

        setup_logging()
        root = logging.getLogger()
        assert len(root.handlers) > 0
        # Verify format includes structured elements
        handler = root.handlers[0]
        assert handler.formatter is not None
        fmt = handler.formatter._fmt
        assert "%(levelname)" in fmt
        assert "%(asctime)" in fmt
        assert "%(name)" in fmt
        assert logging.getLogger("apscheduler").level == logging.WARNING
