"""Pydantic request/response schemas for API endpoints."""

from career_compass.schemas.assessment import AssessmentSubmitRequest, QuestionRead
from career_compass.schemas.chat import (
    ChatMessage,
    ChatRelayRequest,
    ChatReply,
    ImageUrlPart,
    TextPart,
)
from career_compass.schemas.recommendation import (
    AdditionalRecommendations,
    AssessmentResult,
    CareerEntry,
    RecommendationPayload,
    RecommendationRead,
    SalaryRange,
)

__all__ = [
    # Assessment
    "AssessmentSubmitRequest",
    "QuestionRead",
    # Chat relay
    "ChatMessage",
    "ChatRelayRequest",
    "ChatReply",
    "ImageUrlPart",
    "TextPart",
    # Recommendation
    "AdditionalRecommendations",
    "AssessmentResult",
    "CareerEntry",
    "RecommendationPayload",
    "RecommendationRead",
    "SalaryRange",
]
