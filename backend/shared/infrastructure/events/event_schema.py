"""
Event Schema.

Envelope published on Redis and relayed to websocket clients.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class Event:
    """
    Realtime event.

    'entity' carries the event payload (for robot calls: requestId, tableNo,
    status). restaurant_id is None for events that are not tenant scoped.
    """

    type: str
    restaurant_id: str | None = None
    entity: dict[str, Any] = field(default_factory=dict)
    ts: str | None = None
    v: int = 1  # Schema version

    def __post_init__(self) -> None:
        if not self.type or not isinstance(self.type, str):
            raise ValueError("Event type must be a non-empty string")

        if self.restaurant_id is not None and (
            not isinstance(self.restaurant_id, str) or not self.restaurant_id
        ):
            raise ValueError("Event restaurant_id must be a non-empty string or None")

        if self.entity is not None and not isinstance(self.entity, dict):
            raise ValueError("Event entity must be a dict or None")

    def to_json(self) -> str:
        data = asdict(self)
        data["entity"] = data["entity"] or {}
        data["ts"] = data["ts"] or datetime.now(timezone.utc).isoformat()
        return json.dumps(data, ensure_ascii=False, default=str)

    @classmethod
    def from_json(cls, json_str: str) -> "Event":
        return cls(**json.loads(json_str))
