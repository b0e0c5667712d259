"""Pydantic models for the ``gigs`` table.

``GigCreate`` carries the posting-form rules: non-empty title and
description, a known category, and at least ``MIN_GIG_CREDITS`` credits.
A payload that fails these rules never reaches the database.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gigmarket.core.constants import MIN_GIG_CREDITS
from gigmarket.models.enums import ApplicationStatus, GigCategory, GigStatus


class GigCreate(BaseModel):
    """Payload for posting a new gig."""
    title: str
    description: str
    category: GigCategory
    credits: int = Field(default=100, ge=MIN_GIG_CREDITS)

    @field_validator("title", "description")
    @classmethod
    def must_not_be_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be empty")
        return stripped


class Gig(BaseModel):
    """Full gig record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    category: str
    credits: int
    created_by: UUID | None = None
    status: GigStatus = GigStatus.open
    assigned_to: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GigCreator(BaseModel):
    """Display fields of the gig's creator (``profiles`` join)."""
    username: str | None = None
    avatar_url: str | None = None


class GigWithCreator(Gig):
    """Gig joined with its creator's display fields."""
    creator: GigCreator | None = None
    is_mine: bool = False


class GigListResponse(BaseModel):
    """Filtered open gigs plus the categories present in the full set."""
    gigs: list[GigWithCreator]
    total: int
    categories: list[str]


class GigDetailResponse(BaseModel):
    """A single gig and, for an authenticated caller, their application status."""
    gig: GigWithCreator
    my_application_status: ApplicationStatus | None = None
