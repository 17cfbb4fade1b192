"""Mock LLM provider for testing.

MockLLMProvider enables unit testing without hitting the real provider.
"""

from typing import Any

from career_compass.providers.llm.base import (
    CompletionRequest,
    LLMProvider,
    LLMResponse,
    TaskType,
)


class MockLLMProvider(LLMProvider):
    """Mock provider for testing.

    Attributes:
        responses: Pre-configured responses keyed by TaskType.
        errors: Pre-configured exceptions keyed by TaskType. An error takes
            precedence over a response for the same task.
        calls: Record of all invocations for test assertions.
    """

    def __init__(
        self,
        responses: dict[TaskType, str] | None = None,
        errors: dict[TaskType, Exception] | None = None,
    ) -> None:
        """Initialize mock provider with optional pre-configured responses.

        Args:
            responses: Dict mapping TaskType to response content. If not provided
                for a task, returns a default "Mock response for {task}" string.
            errors: Dict mapping TaskType to an exception to raise instead.
        """
        # Don't call super().__init__() - we don't need a config for mock
        self.responses: dict[TaskType, str] = dict(responses) if responses else {}
        self.errors: dict[TaskType, Exception] = dict(errors) if errors else {}
        self.calls: list[dict[str, Any]] = []

    @property
    def provider_name(self) -> str:
        """Return 'mock' for testing."""
        return "mock"

    def set_response(self, task: TaskType, content: str) -> None:
        """Set or update the response for a specific task type."""
        self.responses[task] = content

    def set_error(self, task: TaskType, error: Exception) -> None:
        """Make calls for a task type raise the given exception."""
        self.errors[task] = error

    async def complete(self, request: CompletionRequest) -> LLMResponse:
        """Record the call and return the configured response or raise."""
        self.calls.append(
            {
                "method": "complete",
                "messages": list(request.messages),
                "task": request.task,
                "kwargs": {
                    "temperature": request.temperature,
                    "max_tokens": request.max_tokens,
                },
            }
        )

        if request.task in self.errors:
            raise self.errors[request.task]

        content = self.responses.get(
            request.task, f"Mock response for {request.task.value}"
        )
        return LLMResponse(
            content=content,
            model="mock-model",
            input_tokens=100,
            output_tokens=50,
            finish_reason="stop",
            latency_ms=10,
        )

    def assert_called_with_task(self, task: TaskType) -> None:
        """Test helper to verify a task was called.

        Raises:
            AssertionError: If the task was not called.
        """
        tasks_called = [c["task"] for c in self.calls]
        assert task in tasks_called, f"Expected {task}, got {tasks_called}"
