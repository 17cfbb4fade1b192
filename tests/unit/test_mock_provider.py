"""Tests for MockLLMProvider."""

import pytest

from career_compass.providers.errors import UpstreamError
from career_compass.providers.llm.base import CompletionRequest, LLMMessage, TaskType
from career_compass.providers.llm.mock_adapter import MockLLMProvider


def _request(task: TaskType = TaskType.CHAT_RESPONSE) -> CompletionRequest:
    return CompletionRequest(
        messages=(LLMMessage(role="user", content="Hello"),),
        task=task,
        temperature=0.2,
        max_tokens=50,
    )


class TestMockLLMProvider:
    """Configured responses, errors and call recording."""

    @pytest.mark.asyncio
    async def test_default_response_names_task(self):
        mock = MockLLMProvider()

        assert await mock.send(_request()) == "Mock response for chat_response"

    @pytest.mark.asyncio
    async def test_configured_response(self):
        mock = MockLLMProvider({TaskType.CAREER_RECOMMENDATION: '{"careers": []}'})

        response = await mock.complete(_request(TaskType.CAREER_RECOMMENDATION))

        assert response.content == '{"careers": []}'
        assert response.model == "mock-model"

    @pytest.mark.asyncio
    async def test_set_response_overrides(self):
        mock = MockLLMProvider()
        mock.set_response(TaskType.CHAT_RESPONSE, "Updated")

        assert await mock.send(_request()) == "Updated"

    @pytest.mark.asyncio
    async def test_configured_error_raised(self):
        mock = MockLLMProvider()
        mock.set_error(TaskType.CHAT_RESPONSE, UpstreamError(503, "down"))

        with pytest.raises(UpstreamError):
            await mock.send(_request())

    @pytest.mark.asyncio
    async def test_records_calls(self):
        mock = MockLLMProvider()

        await mock.send(_request())

        assert len(mock.calls) == 1
        assert mock.calls[0]["task"] == TaskType.CHAT_RESPONSE
        assert mock.calls[0]["kwargs"] == {"temperature": 0.2, "max_tokens": 50}
        mock.assert_called_with_task(TaskType.CHAT_RESPONSE)

    @pytest.mark.asyncio
    async def test_records_call_even_when_raising(self):
        mock = MockLLMProvider(errors={TaskType.CHAT_RESPONSE: UpstreamError(500, "x")})

        with pytest.raises(UpstreamError):
            await mock.send(_request())

        assert len(mock.calls) == 1

    def test_assert_called_with_task_fails_when_not_called(self):
        mock = MockLLMProvider()

        with pytest.raises(AssertionError):
            mock.assert_called_with_task(TaskType.CAREER_RECOMMENDATION)
