"""
Study app schemas: accounts, preferences, statistics. Keys are snake_case.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .common import ALIASED


# =============================================================================
# Accounts
# =============================================================================


class AppUserOutput(BaseModel):
    user_id: str = Field(alias="id")
    email: str
    name: str
    profile_image_url: str | None = None
    created_at: datetime | None = None
    last_login_at: datetime | None = None
    is_active: bool = True
    preferences: dict = Field(default_factory=dict)
    fcm_token: str | None = None

    model_config = ALIASED


class SignInBody(BaseModel):
    email: str | None = None
    password: str | None = None
    device_info: dict[str, Any] | None = None


class SignUpBody(SignInBody):
    name: str | None = None
    preferences: dict[str, Any] | None = None


class UserIdBody(BaseModel):
    user_id: str | None = None


class ForgotPasswordBody(BaseModel):
    email: str | None = None


class ProfileUpdateBody(UserIdBody):
    name: str | None = None
    profile_image_url: str | None = None
    preferences: dict[str, Any] | None = None


class FcmTokenBody(UserIdBody):
    fcm_token: str | None = None


# =============================================================================
# Preferences
# =============================================================================


class PreferencesOutput(BaseModel):
    user_id: str
    theme_mode: str
    language: str
    notifications_enabled: bool
    reminder_frequency: str
    study_reminder_time: str
    sound_enabled: bool
    haptic_feedback_enabled: bool
    auto_save_interval: int
    data_backup_enabled: bool
    favorite_subjects: list = Field(default_factory=list)
    custom_settings: dict = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ALIASED


# =============================================================================
# Statistics
# =============================================================================


class StatsOutput(BaseModel):
    user_id: str
    total_quizzes: int = 0
    total_questions: int = 0
    correct_answers: int = 0
    average_score: float = 0.0
    study_streak: int = 0
    total_study_hours: int = 0
    completed_flashcards: int = 0
    saved_notes: int = 0
    subject_stats: dict = Field(default_factory=dict)
    last_activity: datetime | None = None

    model_config = ALIASED


class IncrementBody(BaseModel):
    type: str | None = None
    value: int = 1
    subject: str | None = None


class ActivityBody(BaseModel):
    activity_type: str | None = Field(default=None, alias="activityType")
    duration: int | None = None
    subject: str | None = None
    score: float | None = None

    model_config = ALIASED


class AuthResponse(BaseModel):
    success: bool = True
    user: AppUserOutput | None = None
    message: str
