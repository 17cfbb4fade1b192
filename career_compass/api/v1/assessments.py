"""Assessments API router.

- GET /questions: The question catalog
- POST /: Submit answers and receive career recommendations
"""

from fastapi import APIRouter, Request, status

from career_compass.api.deps import CurrentUserId, DbSession, Pipeline
from career_compass.core.config import settings
from career_compass.core.errors import (
    ProcessingFailedError,
    UpstreamFailureError,
    ValidationError,
)
from career_compass.core.rate_limiting import limiter
from career_compass.core.responses import DataResponse
from career_compass.providers.errors import ProviderError
from career_compass.schemas.assessment import AssessmentSubmitRequest, QuestionRead
from career_compass.schemas.recommendation import AssessmentResult, RecommendationRead
from career_compass.services.answer_formatter import MissingQuestionError
from career_compass.services.question_catalog import QUESTION_CATALOG
from career_compass.services.recommendation_parser import RecommendationParseError

router = APIRouter()


@router.get("/questions")
async def list_questions() -> DataResponse[list[QuestionRead]]:
    """List the assessment questions in display order."""
    return DataResponse(
        data=[QuestionRead.from_question(question) for question in QUESTION_CATALOG]
    )


@router.post("", status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.rate_limit_llm)
async def submit_assessment(
    request: Request,  # noqa: ARG001
    body: AssessmentSubmitRequest,
    user_id: CurrentUserId,
    db: DbSession,
    pipeline: Pipeline,
) -> DataResponse[AssessmentResult]:
    """Submit assessment answers and generate career recommendations.

    The submission is stored before the model is called and is kept even
    when recommendation generation fails.
    Security: Rate limited to prevent LLM cost abuse.

    Args:
        request: HTTP request (required by the rate limiter).
        body: Answer map.
        user_id: Current authenticated user (injected).
        db: Database session (injected).
        pipeline: Recommendation pipeline (injected).

    Returns:
        DataResponse with the assessment id and the stored recommendation.

    Raises:
        ValidationError: 400 if an answer references an unknown question.
        UpstreamFailureError: 502 if the model provider failed.
        ProcessingFailedError: 500 if the model output was unusable.
    """
    try:
        result = await pipeline.run(db, user_id=user_id, answers=body.answers)
    except MissingQuestionError as e:
        raise ValidationError(
            str(e),
            details=[{"field": "answers", "question_id": str(e.question_id)}],
        ) from e
    except ProviderError as e:
        raise UpstreamFailureError() from e
    except RecommendationParseError as e:
        raise ProcessingFailedError() from e

    return DataResponse(
        data=AssessmentResult(
            assessment_id=result.assessment.id,
            recommendation=RecommendationRead.model_validate(result.recommendation),
        )
    )
