"""Bedtime story generation via the Gemini generateContent API.

Every call is single-turn and stateless. Any failure degrades to a fixed
fallback text so the caller always has something to send.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

STORY_PROMPT = (
    "Generate a short, calming bedtime story for children (approx. 100-150 words)."
)
FALLBACK_STORY_TEXT = (
    "Oops! I couldn't generate a story right now. Please try again later."
)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-1.5-flash"


class StoryGenerationError(Exception):
    """Raised when the backend response carries no usable story text."""


@dataclass(frozen=True)
class GeneratedStory:
    text: str


@dataclass(frozen=True)
class FallbackStory:
    text: str = FALLBACK_STORY_TEXT


StoryResult = GeneratedStory | FallbackStory


def extract_story_text(body: Any) -> str:
    """Join the text parts of the first candidate in a generateContent response."""
    try:
        candidates = body["candidates"]
        parts = candidates[0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        raise StoryGenerationError(f"Unexpected response shape: {e!r}") from e

    if not isinstance(parts, list):
        raise StoryGenerationError(f"Response parts is not a list: {type(parts).__name__}")
    texts = [
        part["text"] for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ]
    if not texts:
        raise StoryGenerationError("Response candidate has no text parts")
    return "".join(texts)


class StoryGenerator:
    """Generates one story per call. No retries, no caching."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        api_base: str = GEMINI_API_BASE,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._api_base = api_base
        self._timeout = timeout
        self._transport = transport

    async def generate_story(self) -> StoryResult:
        try:
            text = await self._generate(STORY_PROMPT)
        except (httpx.HTTPError, StoryGenerationError) as exc:
            logger.warning("Story generation failed, using fallback text: %s", exc)
            return FallbackStory()
        return GeneratedStory(text=text)

    async def _generate(self, prompt: str) -> str:
        url = f"{self._api_base.rstrip('/')}/models/{self._model}:generateContent"
        request_body = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        headers = {"x-goog-api-key": self._api_key}

        async with httpx.AsyncClient(
            transport=self._transport, timeout=self._timeout,
        ) as client:
            resp = await client.post(url, json=request_body, headers=headers)
            resp.raise_for_status()

        try:
            body = resp.json()
        except ValueError as e:
            raise StoryGenerationError("Response body is not JSON") from e
        return extract_story_text(body)
