"""
Shared pooled httpx client.

Each outbound integration owns one long-lived AsyncClient created lazily
inside the running event loop and closed on application shutdown.
"""

import asyncio
import threading
from typing import Optional

import httpx

_init_lock = threading.Lock()


class PooledHttpClient:
    """
    Lazily created httpx.AsyncClient guarded by an asyncio.Lock.

    Subclasses set base_url / timeout and call `await self._get_client()`.
    """

    def __init__(self, base_url: str, timeout: float, max_connections: int = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._max_connections = max_connections
        self._client: Optional[httpx.AsyncClient] = None
        self._client_lock: Optional[asyncio.Lock] = None

    def _get_lock(self) -> asyncio.Lock:
        if self._client_lock is None:
            with _init_lock:
                if self._client_lock is None:
                    self._client_lock = asyncio.Lock()
        return self._client_lock

    async def _get_client(self) -> httpx.AsyncClient:
        # Fast path: client already initialized
        if self._client is not None and not self._client.is_closed:
            return self._client

        async with self._get_lock():
            if self._client is None or self._client.is_closed:
                self._client = httpx.AsyncClient(
                    timeout=self.timeout,
                    limits=httpx.Limits(
                        max_connections=self._max_connections,
                        max_keepalive_connections=max(1, self._max_connections // 2),
                    ),
                )
        return self._client

    async def close(self) -> None:
        """Close the underlying client. Called on application shutdown."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
