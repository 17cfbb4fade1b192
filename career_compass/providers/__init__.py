"""Provider abstraction layer.

Exports:
    Error classes for provider error handling
    ProviderConfig for configuration
    Factory function for the provider instance
"""

from career_compass.providers.config import ProviderConfig
from career_compass.providers.errors import (
    ProviderError,
    TransportError,
    UpstreamError,
)
from career_compass.providers.factory import get_llm_provider, reset_providers

__all__ = [
    # Config
    "ProviderConfig",
    # Errors
    "ProviderError",
    "TransportError",
    "UpstreamError",
    # Factory
    "get_llm_provider",
    "reset_providers",
]
