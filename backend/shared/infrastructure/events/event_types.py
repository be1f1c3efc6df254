"""
Event type constants for realtime notifications.
"""

from shared.config.constants import EventType

# Robot calls
ROBOT_CALLED = EventType.ROBOT_CALLED
ROBOT_STATUS_UPDATED = EventType.ROBOT_STATUS_UPDATED

# Redis pub/sub payloads above this size are rejected
MAX_EVENT_SIZE = 64 * 1024
