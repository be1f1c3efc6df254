"""
Dish image storage.

Two backends share one interface: the local filesystem (served under
settings.media_base_url) and S3 (signed download URLs). The backend is
chosen by settings.storage_backend.

Usage:
    storage = get_storage()
    stored = await asyncio.to_thread(storage.save, "pizza.png", data, "image/png")
    url = storage.url(stored)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Protocol

from shared.config.settings import settings

# Object key prefix for dish images
DISH_PREFIX = "dishes"


class StorageBackend(Protocol):
    def save(self, file_name: str, data: bytes, content_type: str | None) -> str:
        """Store the bytes and return the stored file name."""

    def exists(self, file_name: str) -> bool:
        """True when a stored object with this name exists."""

    def url(self, file_name: str) -> str:
        """Public or signed URL of a stored object."""


@lru_cache
def get_storage() -> StorageBackend:
    if settings.storage_backend == "s3":
        from .s3_backend import S3Backend

        return S3Backend()
    from .local_backend import LocalBackend

    return LocalBackend()


__all__ = ["DISH_PREFIX", "StorageBackend", "get_storage"]
