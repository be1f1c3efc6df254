"""
User Stats Service.

Per-user study counters. The average score is always derived from
correct_answers / total_questions; the study streak grows by one per
study activity while the previous activity is at most a day old and
restarts otherwise.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import UserStats
from rest_api.repositories import AppUserRepository, UserStatsRepository
from rest_api.schemas.app_user import StatsOutput
from rest_api.services.base_service import BaseService
from shared.config.constants import LEADERBOARD_CATEGORIES, STAT_INCREMENT_TYPES
from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError, ValidationError

logger = get_logger(__name__)

COUNTER_FIELDS = (
    "total_quizzes",
    "total_questions",
    "correct_answers",
    "study_streak",
    "total_study_hours",
    "completed_flashcards",
    "saved_notes",
)
STREAK_ACTIVITIES = ("total_quizzes", "completed_flashcards", "saved_notes")
SUBJECT_COUNTERS = ("total_questions", "correct_answers")

# activity type -> counter it increments
ACTIVITY_FIELDS = {
    "quiz": "total_quizzes",
    "flashcard": "completed_flashcards",
    "note": "saved_notes",
    "study": "total_study_hours",
}


def average_score(total_questions: int, correct_answers: int) -> float:
    if not total_questions:
        return 0.0
    return round(correct_answers / total_questions * 100, 2)


def next_streak(current: int, last_activity: datetime | None, now: datetime) -> int:
    """current + 1 when the last activity is within a day of now, else 1."""
    if last_activity is None:
        return 1
    if last_activity.tzinfo is None:
        last_activity = last_activity.replace(tzinfo=timezone.utc)
    return current + 1 if now - last_activity <= timedelta(days=1) else 1


def validate_stats(data: dict[str, Any]) -> list[str]:
    errors = []
    for field in COUNTER_FIELDS:
        if field in data:
            value = data[field]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                errors.append(f"{field} must be a non-negative integer")

    if "average_score" in data:
        score = data["average_score"]
        if isinstance(score, bool) or not isinstance(score, (int, float)) or not 0 <= score <= 100:
            errors.append("average_score must be a number between 0 and 100")

    if "subject_stats" in data:
        subjects = data["subject_stats"]
        if not isinstance(subjects, dict):
            errors.append("subject_stats must be an object")
        else:
            for key, value in subjects.items():
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    errors.append(f"subject_stats.{key} must be a non-negative integer")
    return errors


def default_stats() -> dict[str, Any]:
    return {
        "total_quizzes": 0,
        "total_questions": 0,
        "correct_answers": 0,
        "average_score": 0.0,
        "study_streak": 0,
        "total_study_hours": 0,
        "completed_flashcards": 0,
        "saved_notes": 0,
        "subject_stats": {},
    }


class UserStatsService(BaseService[UserStats]):
    def __init__(self, db: Session):
        super().__init__(db, UserStatsRepository(db))
        self._users = AppUserRepository(db)

    def get(self, user_id: str) -> StatsOutput:
        return StatsOutput.model_validate(self._get_or_create(user_id))

    def update(self, user_id: str, data: dict[str, Any]) -> StatsOutput:
        """
        Replace the supplied counters. average_score is recomputed when both
        total_questions and correct_answers are supplied.
        """
        self._ensure_user(user_id)
        errors = validate_stats(data)
        if errors:
            raise ValidationError("Validation failed", errors=errors, user_id=user_id)

        values = {k: v for k, v in data.items() if k in default_stats()}
        if "total_questions" in values and "correct_answers" in values:
            values["average_score"] = average_score(values["total_questions"], values["correct_answers"])

        stats = self._get_or_create(user_id)
        for key, value in values.items():
            setattr(stats, key, value)
        stats.last_activity = datetime.now(timezone.utc)
        self._commit("update stats", user_id=user_id)
        self._db.refresh(stats)
        return StatsOutput.model_validate(stats)

    def increment(self, user_id: str, stat_type: str | None, value: int = 1, subject: str | None = None) -> StatsOutput:
        if stat_type not in STAT_INCREMENT_TYPES:
            raise ValidationError(f"Invalid increment type. Valid types: {', '.join(STAT_INCREMENT_TYPES)}")
        if value < 0:
            raise ValidationError("Increment value must be a non-negative integer")

        stats = self._get_or_create(user_id)
        now = datetime.now(timezone.utc)
        setattr(stats, stat_type, (getattr(stats, stat_type) or 0) + value)

        if subject and stat_type in SUBJECT_COUNTERS:
            subjects = dict(stats.subject_stats or {})
            subjects[subject] = subjects.get(subject, 0) + value
            stats.subject_stats = subjects
        if stat_type in SUBJECT_COUNTERS:
            stats.average_score = average_score(stats.total_questions, stats.correct_answers)
        if stat_type in STREAK_ACTIVITIES:
            stats.study_streak = next_streak(stats.study_streak, stats.last_activity, now)

        stats.last_activity = now
        self._commit("increment stats", user_id=user_id, stat_type=stat_type)
        self._db.refresh(stats)
        return StatsOutput.model_validate(stats)

    def record_activity(
        self, user_id: str, activity_type: str | None, duration: int | None = None, subject: str | None = None
    ) -> StatsOutput:
        """study: duration in minutes, rounded up to whole hours."""
        field = ACTIVITY_FIELDS.get(activity_type or "")
        if field is None:
            raise ValidationError(f"Invalid activity type. Valid types: {', '.join(ACTIVITY_FIELDS)}")
        value = -(-(duration or 0) // 60) if activity_type == "study" else 1
        return self.increment(user_id, field, value, subject)

    def reset(self, user_id: str) -> StatsOutput:
        stats = self._get_or_create(user_id)
        for key, value in default_stats().items():
            setattr(stats, key, value)
        stats.last_activity = datetime.now(timezone.utc)
        self._commit("reset stats", user_id=user_id)
        self._db.refresh(stats)
        logger.info("Stats reset", user_id=user_id)
        return StatsOutput.model_validate(stats)

    def by_range(self, user_id: str, start: date | None, end: date | None) -> dict[str, Any]:
        """The stats when the last activity falls inside the range, else zeroed defaults."""
        self._ensure_user(user_id)
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        stats = self._repo.find_active_between(
            user_id,
            datetime.combine(start, time.min, tzinfo=timezone.utc),
            datetime.combine(end, time.max, tzinfo=timezone.utc),
        )
        if stats is None:
            return {"user_id": user_id, **default_stats(), "last_activity": None}
        return StatsOutput.model_validate(stats).model_dump(mode="json")

    def leaderboard(self, category: str, limit: int = 10) -> list[dict[str, Any]]:
        if category not in LEADERBOARD_CATEGORIES:
            raise ValidationError(f"Invalid category. Valid categories: {', '.join(LEADERBOARD_CATEGORIES)}")
        rows = self._repo.leaderboard(category, limit)
        names = self._users.names_for([r.user_id for r in rows])
        return [
            {
                "rank": rank,
                "user_id": row.user_id,
                "user_name": names.get(row.user_id, "Unknown User"),
                "score": getattr(row, category),
                "last_activity": row.last_activity.isoformat() if row.last_activity else None,
            }
            for rank, row in enumerate(rows, start=1)
        ]

    def summary(self) -> dict[str, Any]:
        rows = self._repo.all_stats()
        total_questions = sum(r.total_questions for r in rows)
        total_correct = sum(r.correct_answers for r in rows)
        return {
            "total_users": len(rows),
            "total_quizzes_completed": sum(r.total_quizzes for r in rows),
            "total_questions_answered": total_questions,
            "total_correct_answers": total_correct,
            "overall_average_score": round(sum(r.average_score for r in rows) / len(rows), 2) if rows else 0,
            "overall_accuracy": average_score(total_questions, total_correct),
            "highest_study_streak": max((r.study_streak for r in rows), default=0),
            "total_study_hours": sum(r.total_study_hours for r in rows),
            "total_flashcards_completed": sum(r.completed_flashcards for r in rows),
            "total_notes_saved": sum(r.saved_notes for r in rows),
        }

    def _get_or_create(self, user_id: str) -> UserStats:
        self._ensure_user(user_id)
        stats = self._repo.find_by_id(user_id)
        if stats is None:
            stats = UserStats(user_id=user_id, **default_stats())
            self._db.add(stats)
            self._commit("create stats", user_id=user_id)
            self._db.refresh(stats)
        return stats

    def _ensure_user(self, user_id: str) -> None:
        if not self._users.exists(user_id):
            raise NotFoundError("User", user_id, detail="User not found")
