"""
Google Custom Search client for recent news.

Timeouts, connection errors and 5xx/429 answers are retried
(settings.search_max_retries) with a growing delay.
"""

import asyncio
from typing import Any

import httpx

from shared.config.settings import settings
from shared.config.logging import content_logger as logger
from .http_client import PooledHttpClient

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class SearchError(Exception):
    """Search provider failed or is not configured."""


class GoogleSearchClient(PooledHttpClient):
    def __init__(self, api_key: str | None = None, engine_id: str | None = None):
        super().__init__(base_url=settings.search_base_url, timeout=settings.search_timeout)
        self._api_key = api_key if api_key is not None else settings.google_search_api_key
        self._engine_id = engine_id if engine_id is not None else settings.google_search_engine_id
        self.max_retries = settings.search_max_retries
        self.retry_delay = 1.0

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._engine_id)

    async def search_news(self, query: str, num_results: int = 3, days: int = 7) -> list[dict[str, Any]]:
        """
        Most recent results for the query, newest first.

        Raises:
            SearchError: Not configured, or every attempt failed.
        """
        if not self.configured:
            raise SearchError("Search API not configured")

        params = {
            "key": self._api_key,
            "cx": self._engine_id,
            "q": query,
            "num": num_results,
            "sort": "date",
            "dateRestrict": f"d{days}",
        }
        client = await self._get_client()

        for attempt in range(self.max_retries + 1):
            try:
                response = await client.get(self.base_url, params=params)
                if response.status_code in RETRYABLE_STATUS and attempt < self.max_retries:
                    raise httpx.HTTPStatusError("retryable", request=response.request, response=response)
                response.raise_for_status()
                items = response.json().get("items") or []
                return [
                    {
                        "title": item.get("title", ""),
                        "snippet": item.get("snippet", ""),
                        "link": item.get("link", ""),
                        "displayLink": item.get("displayLink", ""),
                    }
                    for item in items
                ]
            except (httpx.TimeoutException, httpx.TransportError, httpx.HTTPStatusError) as e:
                retryable = not isinstance(e, httpx.HTTPStatusError) or (
                    e.response.status_code in RETRYABLE_STATUS
                )
                if retryable and attempt < self.max_retries:
                    delay = self.retry_delay * (attempt + 1)
                    logger.warning(
                        "Search request failed, retrying",
                        attempt=attempt + 1,
                        delay_seconds=delay,
                        error=str(e),
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error("Search request failed", query=query, error=str(e))
                raise SearchError(str(e)) from e
            except ValueError as e:
                raise SearchError("Search returned invalid JSON") from e

        raise SearchError("Search retries exhausted")


search_client = GoogleSearchClient()


async def close_search_client() -> None:
    await search_client.close()
