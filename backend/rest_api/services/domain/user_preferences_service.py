"""
User Preferences Service.

One preferences row per app user, created with defaults on first read.
Updates are validated field by field; every problem is reported at once.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import UserPreferences
from rest_api.repositories import AppUserRepository, UserPreferencesRepository
from rest_api.schemas.app_user import PreferencesOutput
from rest_api.services.base_service import BaseService
from shared.config.constants import ReminderFrequency, ThemeMode
from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.validators import is_valid_hhmm

logger = get_logger(__name__)

BOOLEAN_FIELDS = ("notifications_enabled", "sound_enabled", "haptic_feedback_enabled", "data_backup_enabled")


def default_preferences() -> dict[str, Any]:
    return {
        "theme_mode": "system",
        "language": "en",
        "notifications_enabled": True,
        "reminder_frequency": "daily",
        "study_reminder_time": "19:00",
        "sound_enabled": True,
        "haptic_feedback_enabled": True,
        "auto_save_interval": 5,
        "data_backup_enabled": True,
        "favorite_subjects": [],
        "custom_settings": {},
    }


def validate_preferences(data: dict[str, Any]) -> list[str]:
    """Error messages for a preferences payload; empty when valid."""
    errors = []

    theme = data.get("theme_mode")
    if theme is not None and theme not in ThemeMode.ALL:
        errors.append(f"Invalid theme_mode. Must be one of: {', '.join(ThemeMode.ALL)}")

    if data.get("language") is not None and not isinstance(data["language"], str):
        errors.append("Language must be a string")

    frequency = data.get("reminder_frequency")
    if frequency is not None and frequency not in ReminderFrequency.ALL:
        errors.append(f"Invalid reminder_frequency. Must be one of: {', '.join(ReminderFrequency.ALL)}")

    reminder_time = data.get("study_reminder_time")
    if reminder_time is not None and not is_valid_hhmm(reminder_time):
        errors.append("Invalid study_reminder_time format. Must be HH:MM (e.g., 19:30)")

    for field in BOOLEAN_FIELDS:
        if field in data and not isinstance(data[field], bool):
            errors.append(f"{field} must be a boolean value")

    if "auto_save_interval" in data:
        interval = data["auto_save_interval"]
        if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
            errors.append("auto_save_interval must be a positive integer")

    if "favorite_subjects" in data:
        subjects = data["favorite_subjects"]
        if not isinstance(subjects, list):
            errors.append("favorite_subjects must be an array")
        elif not all(isinstance(s, str) for s in subjects):
            errors.append("All favorite_subjects must be strings")

    if "custom_settings" in data and not isinstance(data["custom_settings"], dict):
        errors.append("custom_settings must be an object")

    return errors


class UserPreferencesService(BaseService[UserPreferences]):
    def __init__(self, db: Session):
        super().__init__(db, UserPreferencesRepository(db))
        self._users = AppUserRepository(db)

    @staticmethod
    def template() -> dict[str, Any]:
        return {"user_id": "", **default_preferences()}

    def get(self, user_id: str) -> PreferencesOutput:
        self._ensure_user(user_id)
        preferences = self._repo.find_by_id(user_id)
        if preferences is None:
            preferences = self._create(user_id, default_preferences())
        return PreferencesOutput.model_validate(preferences)

    def update(self, user_id: str, data: dict[str, Any]) -> PreferencesOutput:
        """
        Raises:
            NotFoundError: Unknown user.
            ValidationError: With the list of field errors.
        """
        self._ensure_user(user_id)
        errors = validate_preferences(data)
        if errors:
            raise ValidationError("Validation failed", errors=errors, user_id=user_id)

        known = {k: v for k, v in data.items() if k in default_preferences()}
        preferences = self._repo.find_by_id(user_id)
        if preferences is None:
            preferences = self._create(user_id, {**default_preferences(), **known})
        else:
            for key, value in known.items():
                setattr(preferences, key, value)
            self._commit("update preferences", user_id=user_id)
            self._db.refresh(preferences)
        return PreferencesOutput.model_validate(preferences)

    def reset(self, user_id: str) -> PreferencesOutput:
        self._ensure_user(user_id)
        preferences = self._repo.find_by_id(user_id)
        if preferences is None:
            preferences = self._create(user_id, default_preferences())
        else:
            for key, value in default_preferences().items():
                setattr(preferences, key, value)
            self._commit("reset preferences", user_id=user_id)
            self._db.refresh(preferences)
        logger.info("Preferences reset", user_id=user_id)
        return PreferencesOutput.model_validate(preferences)

    def _create(self, user_id: str, values: dict[str, Any]) -> UserPreferences:
        preferences = UserPreferences(user_id=user_id, **values)
        self._db.add(preferences)
        self._commit("create preferences", user_id=user_id)
        self._db.refresh(preferences)
        return preferences

    def _ensure_user(self, user_id: str) -> None:
        if not self._users.exists(user_id):
            raise NotFoundError("User", user_id, detail="User not found")
