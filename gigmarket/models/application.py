"""Pydantic models for the ``applications`` table."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from gigmarket.models.enums import ApplicationStatus
from gigmarket.models.gig import Gig


class ApplicationCreate(BaseModel):
    """Payload for submitting an application with a cover letter."""
    cover_letter: str

    @field_validator("cover_letter")
    @classmethod
    def must_not_be_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("cover letter is required")
        return value


class Application(BaseModel):
    """Full application record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    gig_id: UUID | None = None
    user_id: UUID | None = None
    cover_letter: str
    status: ApplicationStatus = ApplicationStatus.pending
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ApplicantSummary(BaseModel):
    """Applicant profile fields shown to the gig owner."""
    username: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    reputation: float | None = None
    skills: list[str] = []


class ApplicationWithApplicant(Application):
    applicant: ApplicantSummary | None = None


class AcceptResult(BaseModel):
    """Outcome of accepting an application."""
    gig: Gig
    application: Application
    rejected_count: int
