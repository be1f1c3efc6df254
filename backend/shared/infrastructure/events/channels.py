"""
Redis channel naming.
"""

from __future__ import annotations

ROBOT_CALLS_CHANNEL = "robot_calls"


def channel_robot_calls(restaurant_id: str | None = None) -> str:
    """
    Robot-call channel, optionally narrowed to one restaurant.

    >>> channel_robot_calls()
    'robot_calls'
    >>> channel_robot_calls("restro-2")
    'restaurant:restro-2:robot_calls'
    """
    if restaurant_id is None:
        return ROBOT_CALLS_CHANNEL
    if not restaurant_id or ":" in restaurant_id:
        raise ValueError(f"Invalid restaurant id for channel: {restaurant_id!r}")
    return f"restaurant:{restaurant_id}:{ROBOT_CALLS_CHANNEL}"
