"""
User preference endpoints.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from rest_api.schemas.app_user import PreferencesOutput
from rest_api.schemas.common import Envelope
from rest_api.services.domain import UserPreferencesService
from shared.infrastructure.db import get_db

router = APIRouter(prefix="/preferences", tags=["user-preferences"])


@router.get("/template/default")
def default_template() -> dict:
    return {
        "success": True,
        "data": UserPreferencesService.template(),
        "message": "Default preferences template retrieved successfully",
    }


@router.get("/{user_id}", response_model=Envelope[PreferencesOutput])
def get_preferences(user_id: str, db: Session = Depends(get_db)):
    """Created with defaults on first read."""
    preferences = UserPreferencesService(db).get(user_id)
    return Envelope(data=preferences, message="User preferences retrieved successfully")


@router.put("/{user_id}", response_model=Envelope[PreferencesOutput])
def update_preferences(user_id: str, body: dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    preferences = UserPreferencesService(db).update(user_id, body)
    return Envelope(data=preferences, message="User preferences updated successfully")


@router.post("/{user_id}/reset", response_model=Envelope[PreferencesOutput])
def reset_preferences(user_id: str, db: Session = Depends(get_db)):
    preferences = UserPreferencesService(db).reset(user_id)
    return Envelope(data=preferences, message="User preferences reset to default successfully")
