"""Provider error taxonomy.

Every failure of the completion client surfaces as a ProviderError
subclass, so callers can handle the whole upstream layer with one handler
and still branch on transport vs provider-side failures.
"""


__all__ = [
    "ProviderConfigurationError",
    "ProviderError",
    "TransportError",
    "UpstreamError",
]


class ProviderError(Exception):
    """Base class for all provider errors.

    All provider-specific exceptions should inherit from this class,
    allowing callers to catch all provider errors with a single handler.
    """

    pass


class ProviderConfigurationError(ProviderError):
    """The provider cannot be constructed from the current settings.

    Raised before any request is sent, e.g. when no API key is configured.
    """

    pass


class TransportError(ProviderError):
    """The provider could not be reached.

    Covers connection failures, TLS errors and timeouts. No response
    envelope was received, so there is no status code.
    """

    pass


class UpstreamError(ProviderError):
    """The provider answered with a non-success status.

    Attributes:
        status: HTTP status code returned by the provider.
        provider_message: Message from the provider's error envelope
            (``{"error": {"message": ...}}``), or a generic fallback.
    """

    def __init__(self, status: int, provider_message: str) -> None:
        """Initialize UpstreamError.

        Args:
            status: HTTP status code returned by the provider.
            provider_message: Error description from the provider envelope.
        """
        super().__init__(f"Provider returned {status}: {provider_message}")
        self.status = status
        self.provider_message = provider_message

    @property
    def is_retryable(self) -> bool:
        """True for rate limiting and server-side failures."""
        return self.status == 429 or self.status >= 500
