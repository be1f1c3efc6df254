"""
Current affairs content: daily items, trending topics, generated quizzes.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shared.utils.json_columns import JSONList, JSONObject
from .base import Base, utcnow


class CurrentAffair(Base):
    """
    One news item with exam-oriented enrichment.

    exam_relevance maps exam type -> score 1..10, mcq_question is a single
    {question, options, correctAnswer, explanation} object or {}.
    """

    __tablename__ = "Current_Affairs"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)  # CA-20240115-3
    title: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text)
    content: Mapped[Optional[str]] = mapped_column(Text)
    source: Mapped[Optional[str]] = mapped_column(String(500))
    url: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[Optional[str]] = mapped_column(String(100))
    date: Mapped[date] = mapped_column(Date, nullable=False)
    key_facts: Mapped[list] = mapped_column(JSONList, default=list)
    exam_relevance: Mapped[dict] = mapped_column(JSONObject, default=dict)
    related_topics: Mapped[list] = mapped_column(JSONList, default=list)
    mcq_question: Mapped[dict] = mapped_column(JSONObject, default=dict)
    tags: Mapped[list] = mapped_column(JSONList, default=list)
    difficulty: Mapped[str] = mapped_column(String(10), default="Medium", nullable=False)
    importance: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    publish_date: Mapped[Optional[date]] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), onupdate=utcnow)

    __table_args__ = (
        Index("ix_current_affairs_date", "date"),
        Index("ix_current_affairs_category", "category"),
        Index("ix_current_affairs_importance", "importance"),
    )


class TrendingTopic(Base):
    """A title seen on a given day, with how often it came up."""

    __tablename__ = "Trending_Topics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    topic: Mapped[str] = mapped_column(String(500), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100))
    frequency: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    importance: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    exam_relevance: Mapped[dict] = mapped_column(JSONObject, default=dict)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    last_mentioned: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("topic", "date", name="uq_trending_topic_date"),
        Index("ix_trending_date_frequency", "date", "frequency"),
    )


class CurrentAffairsQuiz(Base):
    __tablename__ = "Current_Affairs_Quiz"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)  # QUIZ-{ts}-{EXAM}
    quiz_title: Mapped[Optional[str]] = mapped_column(String(500))
    date: Mapped[date] = mapped_column(Date, nullable=False)
    difficulty: Mapped[str] = mapped_column(String(10), default="Medium", nullable=False)
    exam_type: Mapped[Optional[str]] = mapped_column(String(50))
    total_questions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    questions: Mapped[list] = mapped_column(JSONList, default=list)
    category: Mapped[Optional[str]] = mapped_column(String(100))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_quiz_date_exam", "date", "exam_type"),
    )
