"""
Centralized constants for the backend application.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import PaymentStatus, PAYMENT_TRANSITIONS

    if new_status not in PAYMENT_TRANSITIONS[order.payment_status]:
        ...
"""

from enum import Enum
from typing import Final


# =============================================================================
# Identifier prefixes
# =============================================================================


class IdPrefix:
    """Prefixes of the human-readable identifiers ("ORDER-12")."""

    ORDER: Final[str] = "ORDER"
    DISH: Final[str] = "DISH"
    CUSTOMER: Final[str] = "CUSTOMER"
    CHEF: Final[str] = "CHEF"
    ROBOT: Final[str] = "ROBOT"
    FEEDBACK: Final[str] = "Fb"
    RESTAURANT: Final[str] = "restro"
    APP_USER: Final[str] = "USER"


# =============================================================================
# Roles
# =============================================================================


class AdminRole(str, Enum):
    """Roles an admin account can hold. The role doubles as the id prefix."""

    MANAGER = "Manager"
    CHEF = "Chef"


# =============================================================================
# Order lifecycle
# =============================================================================


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"


class ServingStatus(str, Enum):
    PENDING = "PENDING"
    PREPARING = "PREPARING"
    SERVED = "SERVED"
    CANCELLED = "CANCELLED"


# Valid status transitions (from -> allowed to states)
PAYMENT_TRANSITIONS: Final[dict[PaymentStatus, frozenset[PaymentStatus]]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.PAID}),
    PaymentStatus.PAID: frozenset(),  # Terminal state
}

SERVING_TRANSITIONS: Final[dict[ServingStatus, frozenset[ServingStatus]]] = {
    ServingStatus.PENDING: frozenset(
        {ServingStatus.PREPARING, ServingStatus.SERVED, ServingStatus.CANCELLED}
    ),
    ServingStatus.PREPARING: frozenset({ServingStatus.SERVED, ServingStatus.CANCELLED}),
    ServingStatus.SERVED: frozenset(),  # Terminal state
    ServingStatus.CANCELLED: frozenset(),  # Terminal state
}


# =============================================================================
# Robot calls
# =============================================================================


class RobotCallStatus(str, Enum):
    PENDING = "pending"
    DISPATCHED = "dispatched"
    FAILED = "failed"
    COMPLETED = "completed"


# =============================================================================
# Current affairs
# =============================================================================


class ExamType(str, Enum):
    UPSC = "upsc"
    PCS = "pcs"
    SSC = "ssc"
    BANKING = "banking"
    RAILWAY = "railway"


EXAM_CATEGORIES: Final[dict[str, list[str]]] = {
    ExamType.UPSC.value: [
        "politics", "economics", "international relations", "science",
        "environment", "geography", "history", "culture",
    ],
    ExamType.PCS.value: [
        "state politics", "local governance", "state economy",
        "regional issues", "national politics",
    ],
    ExamType.SSC.value: [
        "general awareness", "current events", "sports", "awards",
        "books", "important dates",
    ],
    ExamType.BANKING.value: [
        "financial sector", "rbi policies", "banking regulations",
        "monetary policy", "financial markets",
    ],
    ExamType.RAILWAY.value: [
        "transportation", "infrastructure", "technology", "safety",
        "government schemes",
    ],
}

SEARCH_QUERIES: Final[dict[str, str]] = {
    "politics": "India politics government policy recent news",
    "economics": "India economy GDP inflation budget economic policy",
    "science": "science technology innovation research India ISRO",
    "environment": "climate change environment pollution sustainable development India",
    "government schemes": "government schemes policies welfare programs India",
}


# =============================================================================
# User preferences / stats
# =============================================================================


class ThemeMode:
    ALL: Final[tuple[str, ...]] = ("system", "light", "dark")


class ReminderFrequency:
    ALL: Final[tuple[str, ...]] = ("never", "daily", "weekly", "monthly")


STAT_INCREMENT_TYPES: Final[tuple[str, ...]] = (
    "total_quizzes",
    "total_questions",
    "correct_answers",
    "total_study_hours",
    "completed_flashcards",
    "saved_notes",
)

LEADERBOARD_CATEGORIES: Final[tuple[str, ...]] = (
    "average_score",
    "study_streak",
    "total_quizzes",
    "total_questions",
    "correct_answers",
    "total_study_hours",
    "completed_flashcards",
    "saved_notes",
)


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    # Quantity limits
    MIN_QUANTITY: Final[int] = 1
    MAX_QUANTITY: Final[int] = 999

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 500
    DEFAULT_OFFSET: Final[int] = 0

    # Analytics windows
    DEFAULT_REPORT_DAYS: Final[int] = 30
    MAX_INSIGHT_RANGE_DAYS: Final[int] = 365
    MAX_QUIZ_QUESTIONS: Final[int] = 50


# =============================================================================
# Event Types (for Redis / WebSocket)
# =============================================================================


class EventType:
    """Realtime event type constants."""

    ROBOT_CALLED: Final[str] = "robot-called"
    ROBOT_STATUS_UPDATED: Final[str] = "robot-status-updated"
