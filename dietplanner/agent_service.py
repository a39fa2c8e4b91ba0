# -*- coding: utf-8 -*-
"""Text generation through an OpenAI-compatible chat/completions endpoint.

The planner only needs "prompt in, text out"; everything provider-specific
stays in this module.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .config import Settings, settings as default_settings
from .errors import AgentError

_SYSTEM_PROMPT = (
    "You are an experienced dietitian. Answer with a single JSON object only. "
    "Do NOT output markdown, code fences or any text outside the JSON."
)


class ChatCompletionsGenerator:
    """Async callable: ``await generator(prompt) -> str``."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1500,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        base = base_url.rstrip("/")
        self.url = base if base.endswith("/chat/completions") else f"{base}/chat/completions"
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._transport = transport

    def _payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": _SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def __call__(self, prompt: str) -> str:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        # No client-side timeout here: the caller bounds the whole call.
        async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
            try:
                resp = await client.post(self.url, headers=headers, json=self._payload(prompt))
                resp.raise_for_status()
                data = resp.json()
            except httpx.HTTPStatusError as exc:
                raise AgentError(f"Agent API error: {exc.response.status_code}") from exc
            except httpx.RequestError as exc:
                raise AgentError(f"Agent API unreachable: {exc}") from exc
            except ValueError as exc:
                raise AgentError("Agent API returned non-JSON response") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AgentError("Agent API response has no message content") from exc
        if not isinstance(content, str) or not content.strip():
            raise AgentError("Agent API returned empty content")
        return content


def build_text_generator(cfg: Settings | None = None) -> Optional[ChatCompletionsGenerator]:
    """Generator from settings, or None when no API key is configured."""
    cfg = cfg or default_settings
    if not cfg.ai_api_key:
        return None
    return ChatCompletionsGenerator(
        base_url=cfg.ai_base_url,
        api_key=cfg.ai_api_key,
        model=cfg.ai_model,
        temperature=cfg.ai_temperature,
        max_tokens=cfg.ai_max_tokens,
    )
