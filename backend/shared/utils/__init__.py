"""
Utilities module: Exceptions, validators, JSON columns, identifiers.
"""

from shared.utils.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from shared.utils.identifiers import next_id
from shared.utils.json_columns import parse_json_list
from shared.utils.validators import escape_like_pattern, parse_iso_date

__all__ = [
    # exceptions
    "AuthenticationError",
    "ConflictError",
    "NotFoundError",
    "ValidationError",
    # identifiers
    "next_id",
    # json columns
    "parse_json_list",
    # validators
    "escape_like_pattern",
    "parse_iso_date",
]
