"""OpenAI-compatible chat provider for Gemini, GPT, DeepSeek and friends.

Uses the openai SDK; Gemini is reached through its OpenAI-compatible
endpoint.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog
from openai import AsyncOpenAI

logger = structlog.get_logger()

# Approximate pricing per 1M tokens (input/output)
MODEL_PRICING = {
    "gemini-2.0-flash": (0.10, 0.40),
    "gemini-2.5-flash": (0.30, 2.50),
    "deepseek-chat": (0.14, 0.28),
    "gpt-4o-mini": (0.15, 0.60),
    "gpt-4o": (2.50, 10.00),
    "gpt-4.1-mini": (0.40, 1.60),
    "gpt-4o-mini-search-preview": (0.15, 0.60),
    "gpt-4o-search-preview": (2.50, 10.00),
}


def _estimate_cost(model: str, input_tokens: int, output_tokens: int) -> float:
    """Estimate cost based on known pricing."""
    pricing = MODEL_PRICING.get(model, (1.0, 3.0))
    return (input_tokens * pricing[0] + output_tokens * pricing[1]) / 1_000_000


def _extract_citations(message: Any) -> list[str]:
    """Collect cited URLs from message annotations, first occurrence wins."""
    urls: list[str] = []
    for annotation in getattr(message, "annotations", None) or []:
        citation = getattr(annotation, "url_citation", None)
        url = getattr(citation, "url", None) if citation else None
        if isinstance(url, str) and url and url not in urls:
            urls.append(url)
    return urls


@dataclass
class ChatResponse:
    """Response from a chat completion."""

    content: str
    model: str
    cost: float
    input_tokens: int
    output_tokens: int
    duration_ms: int
    citations: list[str] = field(default_factory=list)


class ChatProvider:
    """OpenAI-compatible chat provider."""

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self.model = model

    async def chat(
        self,
        messages: list[dict[str, str]],
        model: Optional[str] = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
        json_mode: bool = False,
        web_search: bool = False,
    ) -> ChatResponse:
        """Send chat completion request.

        ``web_search`` enables live web search with URL citations. Only
        search-capable models accept it, and they reject ``temperature``.
        """
        used_model = model or self.model
        start = time.monotonic()

        kwargs: dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        if web_search:
            kwargs["web_search_options"] = {}
        else:
            kwargs["temperature"] = temperature

        response = await self.client.chat.completions.create(
            model=used_model,
            messages=messages,
            max_tokens=max_tokens,
            **kwargs,
        )

        duration_ms = int((time.monotonic() - start) * 1000)
        choice = response.choices[0]
        usage = response.usage

        input_tokens = usage.prompt_tokens if usage else 0
        output_tokens = usage.completion_tokens if usage else 0
        cost = _estimate_cost(used_model, input_tokens, output_tokens)

        logger.debug(
            "Chat completion finished",
            model=used_model,
            duration_ms=duration_ms,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost=round(cost, 6),
        )

        return ChatResponse(
            content=choice.message.content or "",
            model=response.model or used_model,
            cost=cost,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            duration_ms=duration_ms,
            citations=_extract_citations(choice.message),
        )

    async def complete_json(
        self,
        prompt: str,
        system: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        """Single-turn request asking for a JSON object reply."""
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        response = await self.chat(
            messages=messages,
            model=model,
            temperature=0.4,
            json_mode=True,
        )
        return response.content
