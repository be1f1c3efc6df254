"""
Realtime events over Redis pub/sub.

- event_types.py: Event type constants
- event_schema.py: Event dataclass with validation
- channels.py: Channel naming
- redis_pool.py: Connection pool management
- publisher.py: publish_event with retry
- domain_publishers.py: Robot-call publishers
"""

from .event_types import ROBOT_CALLED, ROBOT_STATUS_UPDATED, MAX_EVENT_SIZE
from .event_schema import Event
from .channels import ROBOT_CALLS_CHANNEL, channel_robot_calls
from .redis_pool import get_redis_pool, get_redis_client, close_redis_pool
from .publisher import publish_event
from .domain_publishers import publish_robot_call_event

__all__ = [
    "ROBOT_CALLED",
    "ROBOT_STATUS_UPDATED",
    "MAX_EVENT_SIZE",
    "Event",
    "ROBOT_CALLS_CHANNEL",
    "channel_robot_calls",
    "get_redis_pool",
    "get_redis_client",
    "close_redis_pool",
    "publish_event",
    "publish_robot_call_event",
]
