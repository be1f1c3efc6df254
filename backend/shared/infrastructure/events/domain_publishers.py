"""
Domain event publishers.
"""

from __future__ import annotations

from typing import Any

import redis.asyncio as redis

from .channels import channel_robot_calls
from .event_schema import Event
from .event_types import ROBOT_CALLED, ROBOT_STATUS_UPDATED
from .publisher import publish_event


async def publish_robot_call_event(
    redis_client: redis.Redis,
    event_type: str,
    call: dict[str, Any],
    restaurant_id: str | None = None,
) -> int:
    """
    Publish a robot-call event to the global channel and, when the call is
    tenant scoped, to the restaurant channel as well.
    """
    if event_type not in (ROBOT_CALLED, ROBOT_STATUS_UPDATED):
        raise ValueError(f"Unknown robot-call event type: {event_type}")

    event = Event(type=event_type, restaurant_id=restaurant_id, entity=call)
    delivered = await publish_event(redis_client, channel_robot_calls(), event)
    if restaurant_id:
        delivered += await publish_event(redis_client, channel_robot_calls(restaurant_id), event)
    return delivered
