"""Schema-constrained requests against the configured LLM provider."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Sequence, TypeVar, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config import Settings
from .errors import EmptyResponseError, MalformedResponseError
from .llm_provider import (
    ChatMessage,
    GenerationRequest,
    GenerationResult,
    GroundingSource,
    LLMProvider,
)
from .retry import Sleep, with_retry

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

EMPTY_CHAT_REPLY = "I couldn't generate a response."


@dataclass(frozen=True)
class QuerySpec(Generic[T]):
    """Fixed configuration of one query operation.

    ``schema`` is a pydantic model or ``list[Model]``. List schemas are sent
    to the service wrapped in an object under ``list_key`` and unwrapped on
    the way back.
    """

    name: str
    role: str
    schema: Any = None
    system_instruction: str | None = None
    search: bool = True
    thinking_budget: int | None = None
    list_key: str = "items"

    @property
    def is_list(self) -> bool:
        return get_origin(self.schema) is list


@dataclass
class StructuredResult(Generic[T]):
    data: T
    sources: list[GroundingSource] = field(default_factory=list)


def attach_citations(items: Sequence[M], sources: Sequence[GroundingSource]) -> list[M]:
    """Copy source URLs onto items by position; extra items keep their own url."""
    attached = []
    for idx, item in enumerate(items):
        if idx < len(sources) and sources[idx].url:
            attached.append(item.model_copy(update={"url": sources[idx].url}))
        else:
            attached.append(item)
    return attached


class StructuredRequestClient:
    """Long-lived client that turns query specs into validated results."""

    def __init__(
        self,
        provider: LLMProvider,
        settings: Settings,
        provider_kind: str = "openai",
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._provider = provider
        self._settings = settings
        self._provider_kind = provider_kind
        self._sleep = sleep
        self._adapters: dict[Any, TypeAdapter] = {}

    @property
    def provider_name(self) -> str:
        return self._provider.name

    def model_for(self, spec: QuerySpec) -> str:
        return self._settings.model_for(spec.role, self._provider_kind)

    def _adapter(self, schema: Any) -> TypeAdapter:
        adapter = self._adapters.get(schema)
        if adapter is None:
            adapter = TypeAdapter(schema)
            self._adapters[schema] = adapter
        return adapter

    def json_schema(self, spec: QuerySpec) -> dict[str, Any]:
        schema = self._adapter(spec.schema).json_schema(by_alias=True)
        if not spec.is_list:
            return schema
        defs = schema.pop("$defs", None)
        wrapped: dict[str, Any] = {
            "type": "object",
            "properties": {spec.list_key: schema},
            "required": [spec.list_key],
        }
        if defs:
            wrapped["$defs"] = defs
        return wrapped

    def parse(self, spec: QuerySpec[T], text: str) -> T:
        """Validate response text against the query's schema.

        Raises:
            EmptyResponseError: No text for an object-shaped query.
            MalformedResponseError: Text is not JSON or fails validation.
        """
        if not text or not text.strip():
            if spec.is_list:
                return []  # type: ignore[return-value]
            raise EmptyResponseError(f"{spec.name}: no response text")

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(f"{spec.name}: response is not JSON: {exc}") from exc

        if spec.is_list:
            if isinstance(payload, dict):
                payload = payload.get(spec.list_key)
            if payload is None:
                return []  # type: ignore[return-value]

        try:
            return self._adapter(spec.schema).validate_python(payload)
        except ValidationError as exc:
            raise MalformedResponseError(f"{spec.name}: schema violation: {exc}") from exc

    async def _send(self, request: GenerationRequest) -> GenerationResult:
        return await with_retry(
            lambda: self._provider.generate(request),
            max_retries=self._settings.max_retries,
            initial_delay=self._settings.retry_initial_delay,
            sleep=self._sleep,
        )

    async def generate(self, spec: QuerySpec[T], prompt: str) -> StructuredResult[T]:
        request = GenerationRequest(
            model=self.model_for(spec),
            turns=[ChatMessage(role="user", text=prompt)],
            system_instruction=spec.system_instruction,
            search=spec.search,
            schema=self.json_schema(spec),
            schema_name=spec.name,
            thinking_budget=spec.thinking_budget,
        )
        logger.info("Query %s via %s (%s)", spec.name, self.provider_name, request.model)
        result = await self._send(request)
        data = self.parse(spec, result.text)
        if spec.is_list:
            logger.info("Query %s returned %d items", spec.name, len(data))  # type: ignore[arg-type]
        return StructuredResult(data=data, sources=result.sources)

    async def converse(
        self, spec: QuerySpec, history: Sequence[ChatMessage], message: str
    ) -> str:
        """Send the prior conversation plus a new user turn, return the reply text."""
        turns = [m for m in history if m.text]
        turns.append(ChatMessage(role="user", text=message))
        request = GenerationRequest(
            model=self.model_for(spec),
            turns=turns,
            system_instruction=spec.system_instruction,
            search=spec.search,
            thinking_budget=spec.thinking_budget,
        )
        logger.info("Chat turn %d via %s (%s)", len(turns), self.provider_name, request.model)
        result = await self._send(request)
        return result.text or EMPTY_CHAT_REPLY

    async def aclose(self) -> None:
        await self._provider.aclose()
