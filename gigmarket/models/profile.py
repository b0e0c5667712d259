"""Pydantic models for ``profiles`` and its child tables.

Child tables (``skills``, ``education``, ``links``) are exposed on
``ProfileDetail`` as plain values; row ids stay internal to the sync logic.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gigmarket.models.enums import LinkPlatform


class EducationEntry(BaseModel):
    degree: str
    institution: str
    year: str

    @field_validator("degree", "institution", "year")
    @classmethod
    def strip_and_require(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be empty")
        return stripped

    def key(self) -> tuple[str, str, str]:
        return (self.degree, self.institution, self.year)


class Profile(BaseModel):
    """Full profile record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str | None = None
    address: str | None = None
    credits: int = Field(default=0, ge=0)
    bio: str | None = None
    avatar_url: str | None = None
    resume_url: str | None = None
    reputation: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileDetail(Profile):
    """Profile with its skills, education and links."""
    skills: list[str] = []
    education: list[EducationEntry] = []
    links: dict[LinkPlatform, str] = {}


class ProfileUpdate(BaseModel):
    """Payload for editing a profile.

    ``None`` leaves a field or collection untouched; an empty list clears it.
    """
    username: str | None = None
    bio: str | None = None
    skills: list[str] | None = None
    education: list[EducationEntry] | None = None
    links: dict[LinkPlatform, str] | None = None

    @field_validator("skills")
    @classmethod
    def normalize_skills(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        seen: list[str] = []
        for skill in value:
            cleaned = skill.strip()
            if cleaned and cleaned not in seen:
                seen.append(cleaned)
        return seen
