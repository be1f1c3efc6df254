"""
Human-readable identifiers ("ORDER-12", "restro-3", "Manager-2").

Ids are formatted from a prefix and a counter. The counter is derived from
the highest numeric suffix already stored; the primary key constraint
rejects a concurrent duplicate instead of letting it through.
"""

import re
from collections.abc import Iterable

_SUFFIX = re.compile(r"-(\d+)$")


def format_id(prefix: str, number: int) -> str:
    return f"{prefix}-{number}"


def id_suffix(identifier: str | None) -> int | None:
    """Numeric suffix of "PREFIX-N", or None when there is none."""
    if not identifier:
        return None
    match = _SUFFIX.search(identifier)
    return int(match.group(1)) if match else None


def next_id(prefix: str, existing: Iterable[str | None]) -> str:
    """
    Next id after the highest suffix among existing ids with this prefix.

    >>> next_id("DISH", ["DISH-2", "DISH-10", None])
    'DISH-11'
    """
    highest = 0
    marker = f"{prefix}-"
    for identifier in existing:
        if not identifier or not identifier.startswith(marker):
            continue
        suffix = id_suffix(identifier)
        if suffix is not None and suffix > highest:
            highest = suffix
    return format_id(prefix, highest + 1)
