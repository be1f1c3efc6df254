"""
Study app accounts with their preferences and statistics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.utils.json_columns import JSONList, JSONObject
from .base import Base, utcnow


class AppUser(Base):
    """Mobile app account. User Id is "USER-{uuid4}"."""

    __tablename__ = "App_User"

    user_id: Mapped[str] = mapped_column("User Id", String(64), primary_key=True)
    email: Mapped[str] = mapped_column("Email", String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column("Password", String(255), nullable=False)
    name: Mapped[str] = mapped_column("Name", String(200), nullable=False)
    profile_image_url: Mapped[Optional[str]] = mapped_column("Profile Image URL", Text)
    is_active: Mapped[bool] = mapped_column("Is Active", Boolean, default=True, nullable=False)
    preferences: Mapped[dict] = mapped_column("Preferences", JSONObject, default=dict)
    device_info: Mapped[dict] = mapped_column("Device Info", JSONObject, default=dict)
    fcm_token: Mapped[Optional[str]] = mapped_column("FCM Token", Text)
    created_at: Mapped[datetime] = mapped_column("Created At", DateTime(timezone=True), default=utcnow, nullable=False)
    last_login_at: Mapped[Optional[datetime]] = mapped_column("Last Login At", DateTime(timezone=True))


class UserPreferences(Base):
    __tablename__ = "User_Preferences"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    theme_mode: Mapped[str] = mapped_column(String(10), default="system", nullable=False)
    language: Mapped[str] = mapped_column(String(10), default="en", nullable=False)
    notifications_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    reminder_frequency: Mapped[str] = mapped_column(String(10), default="daily", nullable=False)
    study_reminder_time: Mapped[str] = mapped_column(String(5), default="19:00", nullable=False)
    sound_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    haptic_feedback_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    auto_save_interval: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    data_backup_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    favorite_subjects: Mapped[list] = mapped_column(JSONList, default=list)
    custom_settings: Mapped[dict] = mapped_column(JSONObject, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


class UserStats(Base):
    __tablename__ = "User_Stats"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    total_quizzes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_questions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    correct_answers: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    average_score: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    study_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_study_hours: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completed_flashcards: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    saved_notes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    subject_stats: Mapped[dict] = mapped_column(JSONObject, default=dict)
    last_activity: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
