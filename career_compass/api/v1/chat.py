"""Chat relay router.

- POST /messages: Forward a conversation to the model and return its reply

Stateless: nothing is stored, and each call carries the full conversation.
"""

import structlog
from fastapi import APIRouter, Request

from career_compass.api.deps import CurrentUserId, Provider
from career_compass.core.config import settings
from career_compass.core.errors import UpstreamFailureError
from career_compass.core.rate_limiting import limiter
from career_compass.core.responses import DataResponse
from career_compass.providers.errors import ProviderError
from career_compass.providers.llm.base import CompletionRequest, LLMMessage, TaskType
from career_compass.schemas.chat import ChatRelayRequest, ChatReply

router = APIRouter()

logger = structlog.get_logger()


@router.post("/messages")
@limiter.limit(settings.rate_limit_llm)
async def send_chat_message(
    request: Request,  # noqa: ARG001
    body: ChatRelayRequest,
    user_id: CurrentUserId,
    provider: Provider,
) -> DataResponse[ChatReply]:
    """Relay a conversation to the model.

    Security: Rate limited to prevent LLM cost abuse.

    Args:
        request: HTTP request (required by the rate limiter).
        body: Conversation so far.
        user_id: Current authenticated user (injected).
        provider: LLM provider (injected).

    Returns:
        DataResponse with the model's reply.

    Raises:
        UpstreamFailureError: 502 if the model provider failed.
    """
    completion = CompletionRequest(
        messages=tuple(
            LLMMessage(role=message.role, content=message.provider_content())
            for message in body.messages
        ),
        task=TaskType.CHAT_RESPONSE,
    )

    try:
        reply = await provider.send(completion)
    except ProviderError as e:
        logger.error(
            "chat_relay_failed",
            user_id=str(user_id),
            error_type=type(e).__name__,
        )
        raise UpstreamFailureError() from e

    return DataResponse(data=ChatReply(message=reply))
