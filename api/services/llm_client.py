"""Async client for an OpenAI-compatible chat completions API (Groq by default)."""

from __future__ import annotations

import logging
import os
from typing import Optional

from openai import AsyncOpenAI

from .narratives.rulebook import AI_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_BASE = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.1-8b-instant"


class LLMUnavailableError(RuntimeError):
    """Raised when the AI client is not configured or the provider fails."""


def is_configured() -> bool:
    return bool(os.getenv("GROQ_API_KEY"))


def _client() -> AsyncOpenAI:
    api_key = os.getenv("GROQ_API_KEY")
    if not api_key:
        raise LLMUnavailableError("GROQ_API_KEY missing (AI disabled)")
    base_url = (os.getenv("GROQ_API_BASE") or DEFAULT_BASE).rstrip("/")
    timeout = float(os.getenv("GROQ_TIMEOUT", "30"))
    return AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)


async def generate_insights_text(
    user_prompt: str,
    system_prompt: str = AI_SYSTEM_PROMPT,
    max_tokens: int = 700,
    model: Optional[str] = None,
) -> str:
    """Generate a chart reading from ``user_prompt``."""

    client = _client()
    model_name = model or os.getenv("GROQ_MODEL", DEFAULT_MODEL)
    try:
        result = await client.chat.completions.create(
            model=model_name,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            max_tokens=max_tokens,
            temperature=0.7,
        )
    except Exception as exc:  # pragma: no cover - network interaction
        error_msg = str(exc)
        logger.warning("AI insights call failed: %s", error_msg)
        if "rate_limit" in error_msg.lower():
            raise LLMUnavailableError(f"AI rate limit exceeded: {error_msg}") from exc
        elif "invalid_api_key" in error_msg.lower() or "authentication" in error_msg.lower():
            raise LLMUnavailableError(f"Invalid AI API key: {error_msg}") from exc
        elif "timeout" in error_msg.lower() or "timed out" in error_msg.lower():
            raise LLMUnavailableError(
                "AI API error: Request timed out. Consider increasing GROQ_TIMEOUT."
            ) from exc
        else:
            raise LLMUnavailableError(f"AI API error: {error_msg}") from exc

    content = result.choices[0].message.content if result.choices else ""
    return (content or "").strip()
