"""Filesystem storage backend."""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

from shared.config.settings import settings
from shared.config.logging import get_logger
from shared.utils.validators import safe_file_name

from . import DISH_PREFIX

logger = get_logger(__name__)


class LocalBackend:
    """Save images under media_dir/dishes and serve them from media_base_url."""

    def __init__(self, base_dir: str | None = None, base_url: str | None = None) -> None:
        self.base_dir = Path(base_dir or settings.media_dir) / DISH_PREFIX
        self.base_url = (base_url or settings.media_base_url).rstrip("/")
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def save(self, file_name: str, data: bytes, content_type: str | None) -> str:
        stored = f"{uuid4().hex}_{safe_file_name(file_name)}"
        (self.base_dir / stored).write_bytes(data)
        logger.info("Image stored", file_name=stored, size=len(data))
        return stored

    def exists(self, file_name: str) -> bool:
        name = safe_file_name(file_name)
        return name == file_name and (self.base_dir / name).is_file()

    def url(self, file_name: str) -> str:
        return f"{self.base_url}/{DISH_PREFIX}/{file_name}"
