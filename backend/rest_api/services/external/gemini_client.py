"""
Google Gemini client (generateContent REST API).

Used for business recommendations, current-affairs enrichment and quiz
generation. Callers decide what an AI failure means for them: insights
surface it as 502/503, current affairs fall back to rule-based content.
"""

import json
import re
from typing import Any

import httpx

from shared.config.settings import settings
from shared.config.logging import get_logger
from .http_client import PooledHttpClient

logger = get_logger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.MULTILINE)


class AIProviderError(Exception):
    """The AI provider failed or returned something unusable."""


class AINotConfiguredError(AIProviderError):
    """No API key configured."""


def extract_json(text: str) -> Any:
    """
    Parse the JSON payload of a model answer, tolerating ``` fences and
    prose around the first object or array.

    Raises:
        AIProviderError: No JSON found.
    """
    cleaned = _FENCE.sub("", text.strip()).strip()
    try:
        return json.loads(cleaned)
    except ValueError:
        pass

    for opener, closer in (("{", "}"), ("[", "]")):
        start, end = cleaned.find(opener), cleaned.rfind(closer)
        if start != -1 and end > start:
            try:
                return json.loads(cleaned[start : end + 1])
            except ValueError:
                continue
    raise AIProviderError("AI response did not contain valid JSON")


class GeminiClient(PooledHttpClient):
    """HTTP client for the Gemini generateContent endpoint."""

    def __init__(self, api_key: str | None = None, model: str | None = None):
        super().__init__(base_url=settings.gemini_base_url, timeout=settings.gemini_timeout)
        self._api_key = api_key if api_key is not None else settings.google_api_key
        self.model = model or settings.gemini_model

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def generate(self, prompt: str, temperature: float = 0.4) -> str:
        """
        Return the text of the first candidate.

        Raises:
            AINotConfiguredError: No API key.
            AIProviderError: HTTP failure or empty answer.
        """
        if not self.configured:
            raise AINotConfiguredError("GOOGLE_API_KEY is not configured")

        client = await self._get_client()
        try:
            response = await client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                params={"key": self._api_key},
                json={
                    "contents": [{"parts": [{"text": prompt}]}],
                    "generationConfig": {"temperature": temperature},
                },
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Gemini request failed", model=self.model, error=str(e))
            raise AIProviderError(f"Gemini request failed: {e}") from e

        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error("Gemini returned no candidates", model=self.model)
            raise AIProviderError("Gemini returned an empty response") from e

    async def generate_json(self, prompt: str, temperature: float = 0.4) -> Any:
        return extract_json(await self.generate(prompt, temperature))


gemini_client = GeminiClient()


async def close_gemini_client() -> None:
    await gemini_client.close()
