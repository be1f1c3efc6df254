"""
Current affairs repositories: items, trending topics, quizzes.
"""

from collections import Counter
from datetime import date, datetime, timezone
from typing import Sequence

from sqlalchemy import Select, delete, func, or_, select
from sqlalchemy.orm import Session, InstrumentedAttribute

from rest_api.models import CurrentAffair, CurrentAffairsQuiz, TrendingTopic
from shared.utils.validators import escape_like_pattern
from .base import BaseRepository


class CurrentAffairRepository(BaseRepository[CurrentAffair]):
    @property
    def model(self) -> type[CurrentAffair]:
        return CurrentAffair

    @property
    def id_column(self) -> InstrumentedAttribute:
        return CurrentAffair.id

    def _base_query(self, restaurant_id: str | None) -> Select:
        return select(CurrentAffair).order_by(
            CurrentAffair.importance.desc(), CurrentAffair.created_at.desc()
        )

    def find_by_date(self, day: date, category: str | None = None) -> Sequence[CurrentAffair]:
        query = self._base_query(None).where(CurrentAffair.date == day)
        if category:
            query = query.where(func.lower(CurrentAffair.category) == category.lower())
        return self._db.execute(query).scalars().all()

    def count_for_date(self, day: date) -> int:
        return self._db.scalar(
            select(func.count()).select_from(CurrentAffair).where(CurrentAffair.date == day)
        ) or 0

    def find_in_range(
        self, start: date, end: date, category: str | None = None
    ) -> Sequence[CurrentAffair]:
        query = (
            select(CurrentAffair)
            .where(CurrentAffair.date >= start, CurrentAffair.date <= end)
            .order_by(CurrentAffair.date.desc(), CurrentAffair.importance.desc())
        )
        if category:
            query = query.where(func.lower(CurrentAffair.category) == category.lower())
        return self._db.execute(query).scalars().all()

    def find_by_category(self, category: str, limit: int) -> Sequence[CurrentAffair]:
        query = (
            select(CurrentAffair)
            .where(func.lower(CurrentAffair.category) == category.lower())
            .order_by(CurrentAffair.date.desc(), CurrentAffair.importance.desc())
            .limit(limit)
        )
        return self._db.execute(query).scalars().all()

    def search(self, term: str, limit: int) -> Sequence[CurrentAffair]:
        pattern = f"%{escape_like_pattern(term)}%"
        query = (
            select(CurrentAffair)
            .where(
                or_(
                    CurrentAffair.title.ilike(pattern, escape="\\"),
                    CurrentAffair.summary.ilike(pattern, escape="\\"),
                    CurrentAffair.content.ilike(pattern, escape="\\"),
                )
            )
            .order_by(CurrentAffair.date.desc(), CurrentAffair.importance.desc())
            .limit(limit)
        )
        return self._db.execute(query).scalars().all()

    def statistics(self) -> dict:
        total = self.count()
        latest = self._db.scalar(select(func.max(CurrentAffair.date)))
        oldest = self._db.scalar(select(func.min(CurrentAffair.date)))
        by_category = dict(
            self._db.execute(
                select(CurrentAffair.category, func.count()).group_by(CurrentAffair.category)
            ).all()
        )
        by_difficulty = dict(
            self._db.execute(
                select(CurrentAffair.difficulty, func.count()).group_by(CurrentAffair.difficulty)
            ).all()
        )
        avg_importance = self._db.scalar(select(func.avg(CurrentAffair.importance)))
        return {
            "totalItems": total,
            "latestDate": latest.isoformat() if latest else None,
            "oldestDate": oldest.isoformat() if oldest else None,
            "byCategory": {k or "uncategorized": v for k, v in by_category.items()},
            "byDifficulty": by_difficulty,
            "averageImportance": round(float(avg_importance), 2) if avg_importance is not None else 0,
        }

    def upsert(self, item: CurrentAffair) -> CurrentAffair:
        """Insert, or refresh summary/content/relevance/importance of an existing id."""
        existing = self.find_by_id(item.id)
        if existing is None:
            self._db.add(item)
            self._db.flush()
            return item
        existing.summary = item.summary
        existing.content = item.content
        existing.exam_relevance = item.exam_relevance
        existing.importance = item.importance
        self._db.flush()
        return existing

    def delete_older_than(self, cutoff: date) -> int:
        result = self._db.execute(delete(CurrentAffair).where(CurrentAffair.date < cutoff))
        self._db.flush()
        return result.rowcount or 0


class TrendingTopicRepository(BaseRepository[TrendingTopic]):
    @property
    def model(self) -> type[TrendingTopic]:
        return TrendingTopic

    @property
    def id_column(self) -> InstrumentedAttribute:
        return TrendingTopic.id

    def record(self, topic: str, category: str | None, importance: int, exam_relevance: dict, day: date) -> TrendingTopic:
        """Upsert on (topic, date): frequency + 1 and refreshed importance."""
        topic = topic[:500]
        existing = self._db.scalar(
            select(TrendingTopic).where(TrendingTopic.topic == topic, TrendingTopic.date == day)
        )
        if existing is not None:
            existing.frequency += 1
            existing.importance = importance
            existing.last_mentioned = datetime.now(timezone.utc)
            self._db.flush()
            return existing
        row = TrendingTopic(
            topic=topic,
            category=category,
            importance=importance,
            exam_relevance=exam_relevance,
            date=day,
            frequency=1,
        )
        self._db.add(row)
        self._db.flush()
        return row

    def find_since(self, since: date, categories: list[str], limit: int) -> Sequence[TrendingTopic]:
        query = (
            select(TrendingTopic)
            .where(TrendingTopic.date >= since)
            .order_by(TrendingTopic.frequency.desc(), TrendingTopic.importance.desc())
        )
        if categories:
            query = query.where(func.lower(TrendingTopic.category).in_([c.lower() for c in categories]))
        return self._db.execute(query.limit(limit)).scalars().all()


class QuizRepository(BaseRepository[CurrentAffairsQuiz]):
    @property
    def model(self) -> type[CurrentAffairsQuiz]:
        return CurrentAffairsQuiz

    @property
    def id_column(self) -> InstrumentedAttribute:
        return CurrentAffairsQuiz.id

    def count_by_exam(self) -> dict[str, int]:
        rows = self._db.execute(select(CurrentAffairsQuiz.exam_type)).scalars()
        return dict(Counter(row or "general" for row in rows))


def get_current_affair_repository(db: Session) -> CurrentAffairRepository:
    return CurrentAffairRepository(db)


def get_trending_topic_repository(db: Session) -> TrendingTopicRepository:
    return TrendingTopicRepository(db)


def get_quiz_repository(db: Session) -> QuizRepository:
    return QuizRepository(db)
