"""Tests for the signed-in user's dashboard."""

from __future__ import annotations

from collections.abc import Callable
from uuid import uuid4

from fastapi.testclient import TestClient

from gigmarket.services.applications import accept_application, submit_application
from tests.fakes import FakeSupabase


class TestDashboard:
    def test_posted_assigned_and_applications(
        self,
        test_client: TestClient,
        fake_db: FakeSupabase,
        as_user: Callable[..., str],
    ) -> None:
        owner = str(uuid4())
        worker = as_user()
        gig = fake_db.seed(
            "gigs",
            title="Build a landing page",
            description="d",
            category="Web Development",
            credits=100,
            created_by=owner,
            status="open",
            assigned_to=None,
        )
        application = submit_application(gig["id"], worker, "I can do this")
        accept_application(gig["id"], str(application.id), owner)

        response = test_client.get("/api/v1/dashboard")

        assert response.status_code == 200
        body = response.json()
        assert body["credits"] == 100
        assert body["posted_gigs"] == []
        assert [g["title"] for g in body["assigned_gigs"]] == ["Build a landing page"]
        assert [a["status"] for a in body["applications"]] == ["accepted"]
        assert body["mining"]["active"] is False

    def test_owner_sees_posted_gigs(
        self,
        test_client: TestClient,
        fake_db: FakeSupabase,
        as_user: Callable[..., str],
    ) -> None:
        as_user()
        test_client.post(
            "/api/v1/gigs",
            json={"title": "Logo", "description": "Vector logo", "category": "Other"},
        )

        body = test_client.get("/api/v1/dashboard").json()
        assert [g["credits"] for g in body["posted_gigs"]] == [100]
        assert body["assigned_gigs"] == []
