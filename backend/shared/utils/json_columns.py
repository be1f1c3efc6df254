"""
JSON-in-column values.

Dish images, dish types, taste genres, order lines and similar nested
values are stored as JSON text. parse_json_list() is the single place
where stored or submitted values are turned back into lists, and
JSONList is the column type that applies it on every read.
"""

import json
from typing import Any

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

from shared.config.logging import get_logger

logger = get_logger(__name__)


def parse_json_list(value: Any, field_name: str = "") -> list:
    """
    Normalize a stored JSON value to a list.

    - None / "null" / ""        -> []
    - a list                    -> the list
    - JSON text of a list       -> the decoded list
    - any other JSON value      -> [value]
    - text that is not JSON     -> [text]
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, (tuple, set)):
        return list(value)
    if not isinstance(value, (str, bytes)):
        return [value]

    text = value.decode("utf-8") if isinstance(value, bytes) else value
    if text.strip() in ("", "null"):
        return []
    try:
        decoded = json.loads(text)
    except ValueError:
        logger.debug("Stored value is not JSON, wrapping as text", field=field_name)
        return [text]
    if decoded is None:
        return []
    return decoded if isinstance(decoded, list) else [decoded]


def parse_json_object(value: Any, field_name: str = "") -> dict:
    """Normalize a stored JSON value to a dict ({} when absent or invalid)."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    if isinstance(value, (str, bytes)):
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.debug("Stored value is not a JSON object", field=field_name)
            return {}
        return decoded if isinstance(decoded, dict) else {}
    return {}


class JSONList(TypeDecorator):
    """Text column holding a JSON array, always read back as a list."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> str:
        return json.dumps(parse_json_list(value), default=str)

    def process_result_value(self, value: Any, dialect) -> list:
        return parse_json_list(value)


class JSONObject(TypeDecorator):
    """Text column holding a JSON object, always read back as a dict."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> str:
        return json.dumps(parse_json_object(value), default=str)

    def process_result_value(self, value: Any, dialect) -> dict:
        return parse_json_object(value)
