"""Tests for the assessment-to-recommendation pipeline.

Uses MockLLMProvider and an in-memory database. Verifies stage ordering,
what is persisted on each failure, and that nothing partial is stored.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from career_compass.models.assessment import AssessmentSubmission
from career_compass.models.recommendation import Recommendation
from career_compass.providers.config import ProviderConfig
from career_compass.providers.errors import TransportError, UpstreamError
from career_compass.providers.llm.base import TaskType
from career_compass.providers.llm.mock_adapter import MockLLMProvider
from career_compass.services.answer_formatter import MissingQuestionError
from career_compass.services.recommendation_parser import (
    MalformedResponseError,
    SchemaViolationError,
)
from career_compass.services.recommendation_pipeline import RecommendationPipeline
from tests.conftest import TEST_USER_ID, VALID_ANSWERS, make_career, make_model_output


async def _count(db: AsyncSession, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


@pytest.fixture
def provider() -> MockLLMProvider:
    return MockLLMProvider({TaskType.CAREER_RECOMMENDATION: make_model_output()})


class TestPipelineSuccess:
    """Full run."""

    @pytest.mark.asyncio
    async def test_persists_submission_and_recommendation(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        result = await RecommendationPipeline(provider).run(
            db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
        )

        assert result.recommendation.assessment_id == result.assessment.id
        assert result.recommendation.user_id == TEST_USER_ID
        assert [c["title"] for c in result.recommendation.careers] == [
            "Software Developer",
            "Data Analyst",
            "UX Designer",
        ]
        assert await _count(db_session, AssessmentSubmission) == 1
        assert await _count(db_session, Recommendation) == 1

    @pytest.mark.asyncio
    async def test_sends_single_recommendation_request(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        await RecommendationPipeline(provider).run(
            db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
        )

        assert len(provider.calls) == 1
        call = provider.calls[0]
        assert call["task"] == TaskType.CAREER_RECOMMENDATION
        user_prompt = call["messages"][1].content
        assert (
            "Q: What are your main interests?\n"
            "A: Technology and Innovation, Science and Research"
        ) in user_prompt

    @pytest.mark.asyncio
    async def test_stores_answers_as_submitted(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        result = await RecommendationPipeline(provider).run(
            db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
        )

        assert result.assessment.answers == VALID_ANSWERS

    @pytest.mark.asyncio
    async def test_related_careers_defaulted_in_stored_entry(
        self, db_session: AsyncSession
    ):
        career = make_career()
        del career["relatedCareers"]
        provider = MockLLMProvider(
            {TaskType.CAREER_RECOMMENDATION: make_model_output([career])}
        )

        result = await RecommendationPipeline(provider).run(
            db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
        )

        assert result.recommendation.careers[0]["relatedCareers"] == []

    @pytest.mark.asyncio
    async def test_additional_block_stored(self, db_session: AsyncSession):
        provider = MockLLMProvider(
            {
                TaskType.CAREER_RECOMMENDATION: make_model_output(
                    fenced=True, recommendations={"skills": ["Statistics"]}
                )
            }
        )

        result = await RecommendationPipeline(provider).run(
            db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
        )

        assert result.recommendation.additional["skills"] == ["Statistics"]


class TestPipelineFailures:
    """Each failure aborts later stages."""

    @pytest.mark.asyncio
    async def test_unknown_question_makes_no_call_and_stores_nothing(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        with pytest.raises(MissingQuestionError):
            await RecommendationPipeline(provider).run(
                db_session, user_id=TEST_USER_ID, answers={"1": ["Arts"], "99": "x"}
            )

        assert provider.calls == []
        assert await _count(db_session, AssessmentSubmission) == 0

    @pytest.mark.asyncio
    async def test_upstream_error_keeps_submission(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        provider.set_error(TaskType.CAREER_RECOMMENDATION, UpstreamError(401, "bad key"))

        with pytest.raises(UpstreamError):
            await RecommendationPipeline(provider).run(
                db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
            )

        assert await _count(db_session, AssessmentSubmission) == 1
        assert await _count(db_session, Recommendation) == 0

    @pytest.mark.asyncio
    async def test_transport_error_propagates(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        provider.set_error(TaskType.CAREER_RECOMMENDATION, TransportError("timeout"))

        with pytest.raises(TransportError):
            await RecommendationPipeline(provider).run(
                db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
            )

    @pytest.mark.asyncio
    async def test_malformed_output_stores_no_recommendation(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        provider.set_response(TaskType.CAREER_RECOMMENDATION, "Sorry, I can't help.")

        with pytest.raises(MalformedResponseError):
            await RecommendationPipeline(provider).run(
                db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
            )

        assert await _count(db_session, AssessmentSubmission) == 1
        assert await _count(db_session, Recommendation) == 0

    @pytest.mark.asyncio
    async def test_schema_violation_stores_no_recommendation(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        bad = make_career()
        del bad["title"]
        provider.set_response(
            TaskType.CAREER_RECOMMENDATION, make_model_output([make_career(), bad])
        )

        with pytest.raises(SchemaViolationError):
            await RecommendationPipeline(provider).run(
                db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
            )

        assert await _count(db_session, Recommendation) == 0

    @pytest.mark.asyncio
    async def test_missing_careers_never_reaches_store(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        provider.set_response(
            TaskType.CAREER_RECOMMENDATION, json.dumps({"analysis": "A thoughtful profile."})
        )

        with (
            patch(
                "career_compass.services.recommendation_pipeline.RecommendationRepository.create",
                new_callable=AsyncMock,
            ) as create,
            pytest.raises(SchemaViolationError),
        ):
            await RecommendationPipeline(provider).run(
                db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
            )

        create.assert_not_awaited()
        assert await _count(db_session, Recommendation) == 0


class TestPipelineRetry:
    """Caller-configured retry policy."""

    @pytest.mark.asyncio
    async def test_default_is_single_attempt(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        provider.set_error(TaskType.CAREER_RECOMMENDATION, UpstreamError(503, "busy"))

        with pytest.raises(UpstreamError):
            await RecommendationPipeline(provider).run(
                db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
            )

        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_retries_transient_failures_when_configured(
        self, db_session: AsyncSession, provider: MockLLMProvider
    ):
        provider.set_error(TaskType.CAREER_RECOMMENDATION, UpstreamError(503, "busy"))
        config = ProviderConfig(max_retries=2, retry_base_delay_ms=1)

        with (
            patch("career_compass.providers.retry.asyncio.sleep", new_callable=AsyncMock),
            pytest.raises(UpstreamError),
        ):
            await RecommendationPipeline(provider, retry_config=config).run(
                db_session, user_id=TEST_USER_ID, answers=VALID_ANSWERS
            )

        assert len(provider.calls) == 3
