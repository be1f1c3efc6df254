"""
App User Service.

Study app accounts: sign-in/up/out, password reset requests, profile and
push token updates, version check, user listing and deletion. Passwords
are bcrypt-hashed; no session token is issued, the app keeps the returned
user record.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import AppUser
from rest_api.repositories import AppUserRepository
from rest_api.schemas.app_user import AppUserOutput
from rest_api.services.base_service import BaseService
from shared.config.constants import IdPrefix
from shared.config.logging import audit_auth_event, get_logger, mask_email
from shared.config.settings import settings
from shared.security.password import hash_password, verify_password
from shared.utils.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError

logger = get_logger(__name__)

RESET_MESSAGE = "If an account with this email exists, password reset instructions have been sent."


def parse_version(value: str | None) -> tuple[int, ...]:
    """ "1.10.2" -> (1, 10, 2). Non-numeric parts count as 0."""
    parts = []
    for piece in (value or "").strip().split("."):
        digits = "".join(ch for ch in piece if ch.isdigit())
        parts.append(int(digits) if digits else 0)
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def version_info(current_version: str | None, latest: str, minimum: str) -> dict[str, Any]:
    current = parse_version(current_version) if current_version else None
    return {
        "version": latest,
        "min_supported_version": minimum,
        "current_version": current_version,
        "is_force_update": current is not None and current < parse_version(minimum),
        "is_optional_update": current is None or current < parse_version(latest),
    }


class AppUserService(BaseService[AppUser]):
    """Service for study app accounts."""

    def __init__(self, db: Session):
        super().__init__(db, AppUserRepository(db))

    @staticmethod
    def to_output(user: AppUser) -> AppUserOutput:
        return AppUserOutput.model_validate(user)

    def get_entity(self, user_id: str | None) -> AppUser:
        if not user_id:
            raise ValidationError("User ID is required")
        user = self._repo.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id, detail="User not found")
        return user

    # =========================================================================
    # Authentication
    # =========================================================================

    def sign_in(self, email: str | None, password: str | None, device_info: dict | None = None) -> AppUserOutput:
        """
        Raises:
            ValidationError: Missing email or password.
            AuthenticationError: Unknown email, wrong password or inactive account.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self._repo.find_by_email(email)
        if user is None or not verify_password(password, user.password):
            audit_auth_event("APP_SIGNIN", email=email, success=False, reason="invalid_credentials")
            raise AuthenticationError("Invalid email or password", email=mask_email(email))
        if not user.is_active:
            audit_auth_event("APP_SIGNIN", account_id=user.user_id, email=email, success=False, reason="inactive")
            raise AuthenticationError("Account is deactivated. Please contact support.")

        user.last_login_at = datetime.now(timezone.utc)
        if device_info:
            user.device_info = device_info
        self._commit("sign in", user_id=user.user_id)
        self._db.refresh(user)
        audit_auth_event("APP_SIGNIN", account_id=user.user_id, email=email)
        return self.to_output(user)

    def sign_up(
        self,
        email: str | None,
        password: str | None,
        name: str | None,
        device_info: dict | None = None,
        preferences: dict | None = None,
    ) -> AppUserOutput:
        """
        Raises:
            ValidationError: Missing email, password or name.
            ConflictError: Email already registered.
        """
        if not email or not password or not name:
            raise ValidationError("Email, password, and name are required")
        if self._repo.find_by_email(email) is not None:
            raise ConflictError("User with this email already exists", email=mask_email(email))

        user = AppUser(
            user_id=f"{IdPrefix.APP_USER}-{uuid.uuid4()}",
            email=email.strip(),
            password=hash_password(password),
            name=name,
            device_info=device_info or {},
            preferences=preferences or {},
        )
        self._db.add(user)
        self._commit("sign up", email=mask_email(email))
        self._db.refresh(user)
        audit_auth_event("APP_SIGNUP", account_id=user.user_id, email=email)
        return self.to_output(user)

    def sign_out(self, user_id: str | None) -> None:
        """Clears the push token so no notifications reach a signed-out device."""
        user = self.get_entity(user_id)
        user.fcm_token = None
        self._commit("sign out", user_id=user.user_id)
        audit_auth_event("APP_SIGNOUT", account_id=user.user_id)

    def forgot_password(self, email: str | None) -> str:
        """Same answer whether or not the account exists."""
        if not email:
            raise ValidationError("Email is required")
        user = self._repo.find_by_email(email)
        audit_auth_event(
            "PASSWORD_RESET_REQUEST",
            account_id=user.user_id if user else None,
            email=email,
            success=user is not None,
            reason=None if user else "unknown_email",
        )
        return RESET_MESSAGE

    # =========================================================================
    # Profile
    # =========================================================================

    def get_profile(self, user_id: str | None) -> AppUserOutput:
        return self.to_output(self.get_entity(user_id))

    def update_profile(
        self,
        user_id: str | None,
        name: str | None = None,
        profile_image_url: str | None = None,
        preferences: dict | None = None,
    ) -> AppUserOutput:
        user = self.get_entity(user_id)
        if name is not None:
            user.name = name
        if profile_image_url is not None:
            user.profile_image_url = profile_image_url
        if preferences is not None:
            user.preferences = preferences
        self._commit("update profile", user_id=user.user_id)
        self._db.refresh(user)
        return self.to_output(user)

    def update_fcm_token(self, user_id: str | None, fcm_token: str | None) -> None:
        if not user_id or not fcm_token:
            raise ValidationError("User ID and FCM token are required")
        user = self.get_entity(user_id)
        user.fcm_token = fcm_token
        self._commit("update fcm token", user_id=user.user_id)

    # =========================================================================
    # Administration
    # =========================================================================

    def list_users(self) -> list[AppUserOutput]:
        return [self.to_output(u) for u in self._repo.find_by()]

    def delete_user(self, user_id: str | None) -> None:
        user = self.get_entity(user_id)
        self._repo.delete(user)
        self._commit("delete user", user_id=user_id)
        logger.info("App user deleted", user_id=user_id)

    @staticmethod
    def version_check(current_version: str | None = None, platform: str | None = None) -> dict[str, Any]:
        info = version_info(current_version, settings.app_latest_version, settings.app_min_version)
        info["platform"] = platform
        return info
