"""OpenAI provider using the Responses API."""

from __future__ import annotations

from typing import Any

from ..llm_provider import GenerationRequest, GenerationResult, GroundingSource


def _is_reasoning_model(model: str) -> bool:
    normalized = model.strip().lower()
    return normalized.startswith(("gpt-5", "o1", "o3", "o4"))


def reasoning_effort(thinking_budget: int | None) -> str | None:
    """Map a thinking-token budget onto OpenAI's reasoning effort levels."""
    if not thinking_budget:
        return None
    if thinking_budget <= 1024:
        return "low"
    if thinking_budget <= 8192:
        return "medium"
    return "high"


def extract_sources(response: Any) -> list[GroundingSource]:
    """Collect url_citation annotations from the response output, in order."""
    seen: set[str] = set()
    sources: list[GroundingSource] = []
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            for annotation in getattr(part, "annotations", None) or []:
                if getattr(annotation, "type", None) != "url_citation":
                    continue
                url = (getattr(annotation, "url", "") or "").strip()
                if not url or url in seen:
                    continue
                seen.add(url)
                sources.append(GroundingSource(url=url, title=getattr(annotation, "title", "") or ""))
    return sources


class OpenAIProvider:
    """LLM provider using OpenAI's API."""

    def __init__(self, api_key: str) -> None:
        from openai import AsyncOpenAI

        self._client = AsyncOpenAI(api_key=api_key)

    @property
    def name(self) -> str:
        return "OpenAI"

    def build_params(self, request: GenerationRequest) -> dict[str, Any]:
        params: dict[str, Any] = {
            "model": request.model,
            "input": [{"role": m.role, "content": m.text} for m in request.turns],
        }
        if request.system_instruction:
            params["instructions"] = request.system_instruction
        if request.search:
            params["tools"] = [{"type": "web_search"}]
        if request.schema is not None:
            params["text"] = {
                "format": {
                    "type": "json_schema",
                    "name": request.schema_name,
                    "schema": request.schema,
                    "strict": False,
                }
            }
        effort = reasoning_effort(request.thinking_budget)
        if effort and _is_reasoning_model(request.model):
            params["reasoning"] = {"effort": effort}
        return params

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        response = await self._client.responses.create(**self.build_params(request))
        return GenerationResult(
            text=(response.output_text or "").strip(),
            sources=extract_sources(response),
        )

    async def aclose(self) -> None:
        await self._client.close()
