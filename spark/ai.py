"""Best-effort AI text generation for Spark.

A single request to the Gemini generateContent endpoint per call: no
retries, no backoff, httpx's default timeout. Every failure becomes an
``AIResult`` failure that callers turn into a fixed fallback, so nothing
here raises to the UI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from spark.config import DEFAULT_MODEL, Settings

logger = logging.getLogger(__name__)

API_BASE = "https://generativelanguage.googleapis.com/v1beta"
MOTIVATION_FALLBACK = "Keep going! You're doing great."


@dataclass(frozen=True)
class AIResult:
    """Ok(text) or Err(reason)."""

    text: str | None = None
    error: str | None = None

    @classmethod
    def success(cls, text: str) -> AIResult:
        return cls(text=text)

    @classmethod
    def failure(cls, reason: str) -> AIResult:
        return cls(error=reason)

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None

    def or_else(self, default: str) -> str:
        return self.text if self.ok else default


def extract_text(payload: Any) -> str:
    """Concatenate the text parts of the first candidate.

    Raises ValueError when the payload does not have that shape.
    """
    try:
        parts = payload["candidates"][0]["content"]["parts"]
        text = "".join(p.get("text", "") for p in parts)
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise ValueError(f"Unexpected response shape: {e!r}") from e
    if not text.strip():
        raise ValueError("Empty response text")
    return text


class TextGenerator:
    """Thin async client for a generative-text model."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> TextGenerator:
        return cls(api_key=settings.ai.api_key(), model=settings.ai.model)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @property
    def url(self) -> str:
        return f"{API_BASE}/models/{self.model}:generateContent"

    async def generate(self, prompt: str) -> AIResult:
        if not self.enabled:
            return AIResult.failure("disabled")

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {"x-goog-api-key": self.api_key}
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(self.url, json=body, headers=headers)
                resp.raise_for_status()
                text = extract_text(resp.json())
        except httpx.HTTPStatusError as e:
            logger.error("Gemini API error: HTTP %s", e.response.status_code)
            return AIResult.failure(f"http {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error("Gemini API error: %s", e)
            return AIResult.failure(f"network: {e}")
        except ValueError as e:
            logger.error("Gemini API error: %s", e)
            return AIResult.failure(f"malformed: {e}")
        except Exception as e:
            # httpx.InvalidURL and transport bugs are not HTTPError subclasses
            logger.exception("Gemini request failed")
            return AIResult.failure(f"error: {type(e).__name__}")
        return AIResult.success(text.strip())


# ── Operations ────────────────────────────────────────────────


def motivation_prompt(habit_title: str, current_streak: int) -> str:
    return (
        "Give me a very short, punchy (max 15 words) motivational quote specific to "
        f'the habit "{habit_title}" and a current streak of {current_streak} days.'
    )


def refine_prompt(content: str, instruction: str) -> str:
    return (
        f'Rewrite the following note content based on this instruction: "{instruction}".'
        f"\n\nNote Content:\n{content}"
    )


async def habit_motivation(generator: TextGenerator, habit_title: str, current_streak: int) -> str:
    result = await generator.generate(motivation_prompt(habit_title, current_streak))
    return result.or_else(MOTIVATION_FALLBACK)


async def refine_note_content(generator: TextGenerator, content: str, instruction: str) -> str:
    if not instruction.strip():
        return content
    result = await generator.generate(refine_prompt(content, instruction))
    return result.or_else(content)
