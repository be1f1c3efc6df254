"""
User statistics endpoints.

Static paths (leaderboard, summary) are declared before /{user_id}.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from rest_api.schemas.app_user import ActivityBody, IncrementBody, StatsOutput
from rest_api.schemas.common import Envelope
from rest_api.services.domain import UserStatsService
from shared.infrastructure.db import get_db
from shared.utils.exceptions import ValidationError
from shared.utils.validators import parse_iso_date

router = APIRouter(prefix="/stats", tags=["user-stats"])


@router.get("/leaderboard/{category}")
def leaderboard(
    category: str,
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
) -> dict:
    entries = UserStatsService(db).leaderboard(category, limit)
    return {"success": True, "data": entries, "message": "Leaderboard retrieved successfully"}


@router.get("/summary/all")
def stats_summary(db: Session = Depends(get_db)) -> dict:
    return {
        "success": True,
        "data": UserStatsService(db).summary(),
        "message": "Statistics summary retrieved successfully",
    }


@router.get("/{user_id}", response_model=Envelope[StatsOutput])
def get_stats(user_id: str, db: Session = Depends(get_db)):
    return Envelope(data=UserStatsService(db).get(user_id), message="User statistics retrieved successfully")


@router.put("/{user_id}", response_model=Envelope[StatsOutput])
def update_stats(user_id: str, body: dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    if not body:
        raise ValidationError("Statistics data is required")
    stats = UserStatsService(db).update(user_id, body)
    return Envelope(data=stats, message="User statistics updated successfully")


@router.post("/{user_id}/increment", response_model=Envelope[StatsOutput])
def increment_stat(user_id: str, body: IncrementBody, db: Session = Depends(get_db)):
    if not body.type:
        raise ValidationError("User ID and increment type are required")
    stats = UserStatsService(db).increment(user_id, body.type, body.value, body.subject)
    return Envelope(data=stats, message=f"{body.type} incremented successfully")


@router.post("/{user_id}/activity", response_model=Envelope[StatsOutput])
def record_activity(user_id: str, body: ActivityBody, db: Session = Depends(get_db)):
    stats = UserStatsService(db).record_activity(user_id, body.activity_type, body.duration, body.subject)
    return Envelope(data=stats, message="Activity recorded successfully")


@router.post("/{user_id}/reset", response_model=Envelope[StatsOutput])
def reset_stats(user_id: str, db: Session = Depends(get_db)):
    return Envelope(data=UserStatsService(db).reset(user_id), message="User statistics reset successfully")


@router.get("/{user_id}/range")
def stats_for_range(
    user_id: str,
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
) -> dict:
    start, end = parse_iso_date(start_date), parse_iso_date(end_date)
    if (start_date and start is None) or (end_date and end is None):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")
    return {
        "success": True,
        "data": UserStatsService(db).by_range(user_id, start, end),
        "message": "User statistics for date range retrieved successfully",
    }
