"""LLM provider factory - selects provider based on available API keys."""

from __future__ import annotations

from ...config import Settings
from ..errors import MissingApiKeyError
from ..llm_provider import GenerationRequest, GenerationResult, LLMProvider


def provider_kind(settings: Settings) -> str:
    """Return "openai" or "anthropic" for the configured keys.

    An explicit COURTSIDE_PROVIDER wins when its key is present; otherwise
    OPENAI_API_KEY is checked first, then ANTHROPIC_API_KEY.

    Raises:
        MissingApiKeyError: If no API key is configured.
    """
    if settings.provider == "anthropic" and settings.anthropic_api_key:
        return "anthropic"
    if settings.provider == "openai" and settings.openai_api_key:
        return "openai"
    if settings.openai_api_key:
        return "openai"
    if settings.anthropic_api_key:
        return "anthropic"
    raise MissingApiKeyError(
        "No LLM API key found. Set OPENAI_API_KEY or ANTHROPIC_API_KEY in .env"
    )


class UnconfiguredProvider:
    """Stands in when no key is set; every request fails with the key error."""

    def __init__(self, reason: str) -> None:
        self._reason = reason

    @property
    def name(self) -> str:
        return "no provider"

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        raise MissingApiKeyError(self._reason)

    async def aclose(self) -> None:
        return None


def create_provider(settings: Settings) -> LLMProvider:
    kind = provider_kind(settings)

    if kind == "anthropic":
        from .anthropic_provider import AnthropicProvider

        return AnthropicProvider(api_key=settings.anthropic_api_key)

    from .openai_provider import OpenAIProvider

    return OpenAIProvider(api_key=settings.openai_api_key)
