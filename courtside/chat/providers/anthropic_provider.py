"""Anthropic Claude provider using the Messages API."""

from __future__ import annotations

import json
import re
from typing import Any

from ..llm_provider import GenerationRequest, GenerationResult, GroundingSource

MAX_TOKENS = 4096
WEB_SEARCH_TOOL = {"type": "web_search_20250305", "name": "web_search", "max_uses": 5}

_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def strip_json_fence(text: str) -> str:
    """Return the JSON payload from text that may wrap it in a code fence."""
    match = _JSON_FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def final_text(content: list[Any]) -> str:
    """Join the text blocks written after the last search result."""
    last_tool_index = -1
    for i, block in enumerate(content):
        if getattr(block, "type", None) == "web_search_tool_result":
            last_tool_index = i
    pieces = [
        block.text
        for block in content[last_tool_index + 1:]
        if getattr(block, "type", None) == "text" and block.text
    ]
    return "".join(pieces).strip()


def extract_sources(content: list[Any]) -> list[GroundingSource]:
    seen: set[str] = set()
    sources: list[GroundingSource] = []
    for block in content:
        if getattr(block, "type", None) != "text":
            continue
        for citation in getattr(block, "citations", None) or []:
            if getattr(citation, "type", None) != "web_search_result_location":
                continue
            url = (getattr(citation, "url", "") or "").strip()
            if not url or url in seen:
                continue
            seen.add(url)
            sources.append(GroundingSource(url=url, title=getattr(citation, "title", "") or ""))
    return sources


class AnthropicProvider:
    """LLM provider using Anthropic's Claude API."""

    def __init__(self, api_key: str) -> None:
        import anthropic

        self._client = anthropic.AsyncAnthropic(api_key=api_key)

    @property
    def name(self) -> str:
        return "Claude"

    def build_params(self, request: GenerationRequest) -> dict[str, Any]:
        system_parts = []
        if request.system_instruction:
            system_parts.append(request.system_instruction)
        if request.schema is not None:
            system_parts.append(
                "Respond with a single JSON value and nothing else. "
                "It must conform to this JSON schema:\n"
                + json.dumps(request.schema)
            )

        # Conversation must open with a user turn
        turns = list(request.turns)
        while turns and turns[0].role != "user":
            turns.pop(0)

        max_tokens = MAX_TOKENS
        params: dict[str, Any] = {
            "model": request.model,
            "messages": [{"role": m.role, "content": m.text} for m in turns],
        }
        if system_parts:
            params["system"] = "\n\n".join(system_parts)
        if request.search:
            params["tools"] = [WEB_SEARCH_TOOL]
        if request.thinking_budget:
            budget = max(1024, request.thinking_budget)
            params["thinking"] = {"type": "enabled", "budget_tokens": budget}
            max_tokens = budget + MAX_TOKENS
        params["max_tokens"] = max_tokens
        return params

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        response = await self._client.messages.create(**self.build_params(request))
        text = final_text(response.content)
        if request.schema is not None:
            text = strip_json_fence(text)
        return GenerationResult(text=text, sources=extract_sources(response.content))

    async def aclose(self) -> None:
        await self._client.close()
