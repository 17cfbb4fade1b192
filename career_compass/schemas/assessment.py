"""Assessment API request/response schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from career_compass.services.question_catalog import Question

_MAX_ANSWERS = 50
_MAX_OPTIONS_PER_ANSWER = 20
_MAX_OPTION_LENGTH = 500

# =============================================================================
# Request Schemas
# =============================================================================


class AssessmentSubmitRequest(BaseModel):
    """Request body for POST /assessments.

    Attributes:
        answers: Question id → selected option (single-choice) or options
            (multiple-choice). Keys are validated against the catalog by the
            pipeline, not here, so an unknown id yields VALIDATION_ERROR
            naming that id.
    """

    model_config = ConfigDict(extra="forbid")

    answers: dict[str, str | list[str]] = Field(
        ...,
        min_length=1,
        max_length=_MAX_ANSWERS,
        description="Question id to selected option(s)",
    )

    @field_validator("answers")
    @classmethod
    def bound_answer_sizes(
        cls, v: dict[str, str | list[str]]
    ) -> dict[str, str | list[str]]:
        """Bound the number and length of submitted options."""
        for key, answer in v.items():
            options = [answer] if isinstance(answer, str) else answer
            if len(options) > _MAX_OPTIONS_PER_ANSWER:
                msg = f"Too many options for question {key}"
                raise ValueError(msg)
            if any(len(option) > _MAX_OPTION_LENGTH for option in options):
                msg = f"Option too long for question {key}"
                raise ValueError(msg)
        return v


# =============================================================================
# Response Schemas
# =============================================================================


class QuestionRead(BaseModel):
    """Catalog question as returned by the API."""

    id: int
    text: str
    options: list[str]
    cardinality: Literal["single", "multiple"]

    @classmethod
    def from_question(cls, question: Question) -> "QuestionRead":
        """Build from a catalog entry."""
        return cls(
            id=question.id,
            text=question.text,
            options=list(question.options),
            cardinality=question.cardinality.value,
        )
