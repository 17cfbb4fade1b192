"""Assessment-to-recommendation pipeline.

Runs one submission through every stage, synchronously within the
calling request:

1. Format answers against the question catalog (rejects unknown ids
   before any I/O)
2. Persist the assessment submission and commit it
3. Build the completion request
4. Send it to the LLM provider (single attempt unless the caller's retry
   policy allows more)
5. Parse and validate the model output
6. Persist the recommendation

A failure at any stage aborts the rest. The submission committed in step 2
is not rolled back when a later stage fails.
"""

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from career_compass.models.assessment import AssessmentSubmission
from career_compass.models.recommendation import Recommendation
from career_compass.prompts.career_recommendation import build_recommendation_request
from career_compass.providers.config import ProviderConfig
from career_compass.providers.errors import ProviderError, UpstreamError
from career_compass.providers.llm.base import LLMProvider
from career_compass.providers.retry import with_retries
from career_compass.repositories.assessment_repository import AssessmentRepository
from career_compass.repositories.recommendation_repository import (
    RecommendationRepository,
)
from career_compass.services.answer_formatter import AnswerValue, format_answers
from career_compass.services.recommendation_parser import (
    RecommendationParseError,
    parse_recommendation,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class PipelineResult:
    """Records produced by a successful pipeline run."""

    assessment: AssessmentSubmission
    recommendation: Recommendation


def _normalize_answers(answers: Mapping[object, AnswerValue]) -> dict[str, Any]:
    """Convert an answer map to its stored JSON shape (string keys, list values)."""
    return {
        str(key): value if isinstance(value, str) else list(value)
        for key, value in answers.items()
    }


class RecommendationPipeline:
    """Orchestrates one assessment submission end to end.

    Args:
        provider: Completion client used for the single LLM call.
        retry_config: Retry policy for transient upstream failures. The
            default (``max_retries=0``) makes exactly one attempt.
    """

    def __init__(
        self,
        provider: LLMProvider,
        retry_config: ProviderConfig | None = None,
    ) -> None:
        self.provider = provider
        self.retry_config = retry_config or ProviderConfig()

    async def run(
        self,
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
        answers: Mapping[object, AnswerValue],
    ) -> PipelineResult:
        """Run the full pipeline for one submission.

        Args:
            db: Async database session. The pipeline commits the submission
                and the recommendation itself.
            user_id: Authenticated user's UUID.
            answers: Question id → selected option(s), in submission order.

        Returns:
            PipelineResult with both persisted records.

        Raises:
            MissingQuestionError: An answer references an unknown question.
                Nothing has been persisted or sent.
            TransportError: The provider could not be reached.
            UpstreamError: The provider returned a non-success status.
            MalformedResponseError: The model output is not JSON.
            SchemaViolationError: The model output lacks required fields.
        """
        formatted = format_answers(answers)

        submission = await AssessmentRepository.create(
            db, user_id=user_id, answers=_normalize_answers(answers)
        )
        await db.commit()

        log = logger.bind(user_id=str(user_id), assessment_id=str(submission.id))
        log.info("assessment_submitted", answer_count=len(formatted))

        request = build_recommendation_request(formatted)

        try:
            raw_text = await with_retries(
                lambda: self.provider.send(request), self.retry_config
            )
        except ProviderError as exc:
            log.error(
                "recommendation_upstream_failed",
                error_type=type(exc).__name__,
                status=exc.status if isinstance(exc, UpstreamError) else None,
            )
            raise

        try:
            payload = parse_recommendation(raw_text)
        except RecommendationParseError as exc:
            log.error(
                "recommendation_processing_failed",
                error_type=type(exc).__name__,
                raw_length=len(exc.raw_text or ""),
            )
            raise

        recommendation = await RecommendationRepository.create(
            db,
            user_id=user_id,
            assessment_id=submission.id,
            analysis=payload.analysis,
            careers=[career.to_wire() for career in payload.careers],
            additional=payload.additional.to_wire() if payload.additional else None,
        )
        await db.commit()

        log.info(
            "recommendation_created",
            recommendation_id=str(recommendation.id),
            career_count=len(payload.careers),
        )

        return PipelineResult(assessment=submission, recommendation=recommendation)
