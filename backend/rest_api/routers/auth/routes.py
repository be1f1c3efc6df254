"""
Study app account router.
Handles sign-in/up/out, password reset requests, profile, push token,
version check and user administration.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.schemas.app_user import (
    AppUserOutput,
    AuthResponse,
    FcmTokenBody,
    ForgotPasswordBody,
    ProfileUpdateBody,
    SignInBody,
    SignUpBody,
    UserIdBody,
)
from rest_api.schemas.common import Envelope
from rest_api.services.domain import AppUserService
from shared.infrastructure.db import get_db

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signin", response_model=AuthResponse)
def sign_in(body: SignInBody, db: Session = Depends(get_db)) -> AuthResponse:
    user = AppUserService(db).sign_in(body.email, body.password, body.device_info)
    return AuthResponse(user=user, message="Sign in successful")


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def sign_up(body: SignUpBody, db: Session = Depends(get_db)) -> AuthResponse:
    user = AppUserService(db).sign_up(body.email, body.password, body.name, body.device_info, body.preferences)
    return AuthResponse(user=user, message="Account created successfully")


@router.post("/signout", response_model=AuthResponse)
def sign_out(body: UserIdBody, db: Session = Depends(get_db)) -> AuthResponse:
    AppUserService(db).sign_out(body.user_id)
    return AuthResponse(message="Signed out successfully")


@router.post("/forgot-password", response_model=AuthResponse)
def forgot_password(body: ForgotPasswordBody, db: Session = Depends(get_db)) -> AuthResponse:
    """Always the same answer so callers cannot tell which emails are registered."""
    return AuthResponse(message=AppUserService(db).forgot_password(body.email))


@router.put("/profile", response_model=AuthResponse)
def update_profile(body: ProfileUpdateBody, db: Session = Depends(get_db)) -> AuthResponse:
    user = AppUserService(db).update_profile(
        body.user_id,
        name=body.name,
        profile_image_url=body.profile_image_url,
        preferences=body.preferences,
    )
    return AuthResponse(user=user, message="Profile updated successfully")


@router.put("/fcm-token", response_model=AuthResponse)
def update_fcm_token(body: FcmTokenBody, db: Session = Depends(get_db)) -> AuthResponse:
    AppUserService(db).update_fcm_token(body.user_id, body.fcm_token)
    return AuthResponse(message="FCM token updated successfully")


@router.get("/profile/{user_id}", response_model=AuthResponse)
def get_profile(user_id: str, db: Session = Depends(get_db)) -> AuthResponse:
    return AuthResponse(user=AppUserService(db).get_profile(user_id), message="Profile retrieved successfully")


@router.get("/version-check")
def version_check(
    current_version: str | None = Query(default=None, alias="currentVersion"),
    platform: str | None = None,
) -> dict:
    return {"success": True, "data": AppUserService.version_check(current_version, platform)}


@router.get("/users", response_model=Envelope[list[AppUserOutput]])
def list_users(db: Session = Depends(get_db)):
    users = AppUserService(db).list_users()
    return Envelope(data=users, message=f"{len(users)} users found")


@router.delete("/user/{user_id}", response_model=Envelope[None])
def delete_user(user_id: str, db: Session = Depends(get_db)):
    AppUserService(db).delete_user(user_id)
    return Envelope(message="User deleted successfully")
