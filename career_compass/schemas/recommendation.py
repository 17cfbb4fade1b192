"""Recommendation schemas.

Pydantic models for the model-output contract (career entries, salary
ranges, the optional additional-recommendations block) and for the
recommendation read responses.

Field names are snake_case in Python and camelCase on the wire, matching
the JSON template the model is asked to follow.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    """Base for models parsed from model output: camelCase aliases, extras ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SalaryRange(_WireModel):
    """Typical salary at three career stages. All three are required."""

    entry: str
    mid: str
    senior: str


class CareerEntry(_WireModel):
    """One recommended occupation.

    Every field except ``related_careers`` is required; a missing one
    invalidates the whole response. ``related_careers`` defaults to an
    empty list when absent or null.
    """

    title: str = Field(min_length=1)
    industry: str
    description: str
    skills: list[str]
    qualifications: list[str]
    salary_range: SalaryRange
    growth: str
    match_reason: str
    next_steps: list[str]
    challenges: str
    related_careers: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        """Reject whitespace-only titles."""
        if not v.strip():
            msg = "Title cannot be blank"
            raise ValueError(msg)
        return v

    @field_validator("related_careers", mode="before")
    @classmethod
    def default_related_careers(cls, v: Any) -> Any:
        """Treat an explicit null like an absent field."""
        return [] if v is None else v

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys, as stored and returned."""
        return self.model_dump(by_alias=True)


class AdditionalRecommendations(_WireModel):
    """Optional development suggestions accompanying the careers.

    Every field is optional; the block as a whole is advisory.
    """

    skills: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    networking: str | None = None
    organizations: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys, as stored and returned."""
        return self.model_dump(by_alias=True)


class RecommendationPayload(BaseModel):
    """Validated model output, before persistence.

    Attributes:
        analysis: Non-empty profile analysis.
        careers: Non-empty ordered list of career entries.
        additional: Development suggestions, or None if absent/unusable.
    """

    model_config = ConfigDict(frozen=True)

    analysis: str
    careers: list[CareerEntry]
    additional: AdditionalRecommendations | None = None


# =============================================================================
# Response Schemas
# =============================================================================


class RecommendationRead(BaseModel):
    """Recommendation as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    assessment_id: uuid.UUID
    analysis: str
    careers: list[dict[str, Any]]
    additional: dict[str, Any] | None = None
    created_at: datetime


class AssessmentResult(BaseModel):
    """Result of a successful assessment submission."""

    assessment_id: uuid.UUID
    recommendation: RecommendationRead
