"""LLM provider protocol plus the request/response types shared by all backends."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

_message_ids = itertools.count(1)


def _next_message_id() -> str:
    return f"msg-{next(_message_ids)}"


@dataclass(frozen=True)
class ChatMessage:
    """A single chat message. Never mutated after creation."""

    role: str  # "user" or "assistant"
    text: str
    id: str = field(default_factory=_next_message_id)
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class GroundingSource:
    """A web source the service attached to its answer."""

    url: str
    title: str = ""


@dataclass
class GenerationRequest:
    """Everything a backend needs to issue one generative call."""

    model: str
    turns: list[ChatMessage]
    system_instruction: str | None = None
    search: bool = False
    schema: dict[str, Any] | None = None
    schema_name: str = "result"
    thinking_budget: int | None = None


@dataclass
class GenerationResult:
    """Raw text returned by the service and any grounding sources."""

    text: str
    sources: list[GroundingSource] = field(default_factory=list)


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for generative backends."""

    @property
    def name(self) -> str:
        """Human-readable provider name (e.g. 'OpenAI', 'Claude')."""
        ...

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Issue one request and return the raw text plus grounding sources.

        SDK errors are raised unchanged so retry and error classification
        can inspect their status codes.
        """
        ...

    async def aclose(self) -> None:
        """Release the underlying HTTP client."""
        ...
