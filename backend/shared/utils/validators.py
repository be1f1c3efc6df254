"""
Shared validators for input sanitization.
"""

import re
from datetime import date, datetime
from pathlib import PurePath

from shared.config.constants import Limits

# Image uploads
ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
ALLOWED_IMAGE_CONTENT_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}

_SAFE_NAME = re.compile(r"[^A-Za-z0-9._-]+")
_TIME_HHMM = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def escape_like_pattern(value: str) -> str:
    """
    Escape % and _ so user input is matched literally inside LIKE patterns.
    """
    if not value:
        return value

    # Escape the escape character first, then the wildcards
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def sanitize_search_term(term: str, max_length: int = Limits.MAX_SEARCH_TERM_LENGTH) -> str:
    """
    Trim, truncate and strip control characters from a search term.
    """
    if not term:
        return ""

    term = term.strip()[:max_length]
    return re.sub(r"[\x00-\x1f\x7f-\x9f]", "", term)


def validate_quantity(
    quantity: int,
    min_val: int = Limits.MIN_QUANTITY,
    max_val: int = Limits.MAX_QUANTITY,
) -> int:
    """
    Validate quantity is within the accepted range.

    Raises:
        ValueError: If quantity is outside allowed range
    """
    if quantity < min_val:
        raise ValueError(f"Minimum quantity is {min_val}")
    if quantity > max_val:
        raise ValueError(f"Maximum quantity is {max_val}")
    return quantity


def safe_file_name(name: str) -> str:
    """
    Reduce an uploaded file name to a flat, storage-safe name.

    "../My Dish (1).PNG" -> "My_Dish_1_.png"
    """
    base = PurePath(name or "").name
    stem, dot, ext = base.rpartition(".")
    if not dot:
        stem, ext = base, ""
    stem = _SAFE_NAME.sub("_", stem).strip("._") or "image"
    return f"{stem}.{ext.lower()}" if ext else stem


def is_allowed_image(file_name: str, content_type: str | None) -> bool:
    """Extension and declared content type both have to be image types."""
    suffix = PurePath(file_name or "").suffix.lower()
    return suffix in ALLOWED_IMAGE_EXTENSIONS and (content_type or "") in ALLOWED_IMAGE_CONTENT_TYPES


def parse_iso_date(value: str | None) -> date | None:
    """
    Parse a strict YYYY-MM-DD string. Returns None for anything else.
    """
    if not value or not re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def is_valid_hhmm(value: object) -> bool:
    """True for 24h clock times like "7:05" or "19:30"."""
    return isinstance(value, str) and bool(_TIME_HHMM.match(value))
