"""API error classes.

HTTP status codes and machine-readable error codes returned across the
API boundary. Exception handlers in ``career_compass.main`` render these
into the standard ``{"error": {...}}`` envelope.
"""


class APIError(Exception):
    """Base class for API errors.

    All API errors have a code, message, and HTTP status.
    Subclasses set default status_code.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional list of additional error details.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: list[dict] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ValidationError(APIError):
    """Field validation failed (400).

    Use for request body validation errors, unknown question ids, etc.
    """

    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=details,
        )


class UnauthorizedError(APIError):
    """Authentication required (401)."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401,
        )


class NotFoundError(APIError):
    """Resource not found (404).

    Use when requested resource doesn't exist OR doesn't belong to user.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
        )


class UpstreamFailureError(APIError):
    """The LLM provider was unreachable or returned an error (502).

    The message is deliberately generic. Provider messages and status codes
    are logged server-side only.
    """

    def __init__(self) -> None:
        super().__init__(
            code="UPSTREAM_FAILURE",
            message="The recommendation service is temporarily unavailable",
            status_code=502,
        )


class ProcessingFailedError(APIError):
    """The model's output could not be turned into a recommendation (500).

    Raw model text never crosses the API boundary.
    """

    def __init__(self) -> None:
        super().__init__(
            code="PROCESSING_FAILED",
            message="Processing failed. Please try again.",
            status_code=500,
        )


class InternalError(APIError):
    """Unexpected server error (500).

    Use for unhandled exceptions. Never expose stack traces to clients.
    """

    def __init__(self, message: str = "An unexpected error occurred") -> None:
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
        )


class RateLimitedError(APIError):
    """Too many model-backed requests from one caller (429)."""

    def __init__(self, limit: str) -> None:
        super().__init__(
            code="RATE_LIMITED",
            message=f"Rate limit exceeded: {limit}",
            status_code=429,
        )
