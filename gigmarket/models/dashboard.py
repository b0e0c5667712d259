"""Pydantic models for the dashboard endpoint."""

from pydantic import BaseModel

from gigmarket.models.application import Application
from gigmarket.models.gig import Gig
from gigmarket.models.mining import MiningStatus


class Dashboard(BaseModel):
    """Everything the caller's dashboard shows in one payload."""
    credits: int
    posted_gigs: list[Gig]
    assigned_gigs: list[Gig]
    applications: list[Application]
    mining: MiningStatus
