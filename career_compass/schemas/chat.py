"""Chat relay request/response schemas.

The relay is stateless: the client sends the whole conversation on every
call and receives the model's next message. Message content is either
plain text or a list of OpenAI-style content parts (text and image URLs).
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator

_MAX_MESSAGES = 50
_MAX_CONTENT_LENGTH = 10_000
_MAX_CONTENT_PARTS = 10
_MAX_URL_LENGTH = 2048

# =============================================================================
# Request Schemas
# =============================================================================


class TextPart(BaseModel):
    """Text content part."""

    type: Literal["text"]
    text: str = Field(..., min_length=1, max_length=_MAX_CONTENT_LENGTH)


class ImageUrl(BaseModel):
    """Image reference inside an image_url part."""

    url: str = Field(..., min_length=1, max_length=_MAX_URL_LENGTH)


class ImageUrlPart(BaseModel):
    """Image content part, forwarded to the model by URL."""

    type: Literal["image_url"]
    image_url: ImageUrl


ContentPart = Annotated[TextPart | ImageUrlPart, Field(discriminator="type")]


class ChatMessage(BaseModel):
    """One conversation turn.

    Attributes:
        role: Author of the turn.
        content: Message text (non-empty after stripping), or a non-empty
            list of content parts.
    """

    role: Literal["system", "user", "assistant"]
    content: (
        Annotated[str, Field(max_length=_MAX_CONTENT_LENGTH)]
        | Annotated[list[ContentPart], Field(min_length=1, max_length=_MAX_CONTENT_PARTS)]
    )

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v: Any) -> Any:
        """Strip whitespace from text content."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("content")
    @classmethod
    def content_not_empty(
        cls, v: str | list[TextPart | ImageUrlPart]
    ) -> str | list[TextPart | ImageUrlPart]:
        """Validate text content is not empty after stripping."""
        if isinstance(v, str) and not v:
            msg = "Content cannot be empty"
            raise ValueError(msg)
        return v

    def provider_content(self) -> str | list[dict[str, Any]]:
        """Content in the chat-completion wire shape."""
        if isinstance(self.content, str):
            return self.content
        return [part.model_dump() for part in self.content]


class ChatRelayRequest(BaseModel):
    """Request body for POST /chat/messages."""

    messages: list[ChatMessage] = Field(
        ...,
        min_length=1,
        max_length=_MAX_MESSAGES,
        description="Conversation so far, oldest first",
    )


# =============================================================================
# Response Schemas
# =============================================================================


class ChatReply(BaseModel):
    """The model's next message."""

    message: str
