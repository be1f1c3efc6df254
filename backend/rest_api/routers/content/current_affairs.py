"""
Current affairs endpoints for the study app.

Dates are YYYY-MM-DD query strings; every endpoint answers
{"success": true, "data": ...}.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.schemas.content import RefreshBody
from rest_api.services.domain import CurrentAffairsService
from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.utils.exceptions import ValidationError
from shared.utils.validators import parse_iso_date

router = APIRouter(prefix="/api/current-affairs", tags=["current-affairs"])


def get_current_affairs_service(db: Session = Depends(get_db)) -> CurrentAffairsService:
    return CurrentAffairsService(db)


def _date_param(value: str | None, name: str = "date") -> date | None:
    if value is None or value == "":
        return None
    parsed = parse_iso_date(value)
    if parsed is None:
        raise ValidationError(f"Invalid {name} format. Use YYYY-MM-DD", value=value)
    return parsed


@router.get("/daily")
async def daily_current_affairs(
    day: str | None = Query(default=None, alias="date"),
    service: CurrentAffairsService = Depends(get_current_affairs_service),
) -> dict:
    return {"success": True, "data": await service.daily(_date_param(day))}


@router.get("/range")
def current_affairs_range(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    category: str | None = None,
    limit: int = Query(default=50, ge=1, le=Limits.MAX_PAGE_SIZE),
    service: CurrentAffairsService = Depends(get_current_affairs_service),
) -> dict:
    items = service.by_range(
        _date_param(start_date, "startDate"), _date_param(end_date, "endDate"), category, limit
    )
    return {"success": True, "data": {"totalItems": len(items), "currentAffairs": items}}


@router.get("/category/{category}")
def current_affairs_by_category(
    category: str,
    limit: int = Query(default=20, ge=1, le=Limits.MAX_PAGE_SIZE),
    service: CurrentAffairsService = Depends(get_current_affairs_service),
) -> dict:
    items = service.by_category(category, limit)
    return {"success": True, "data": {"category": category, "totalItems": len(items), "currentAffairs": items}}


@router.get("/quiz")
async def current_affairs_quiz(
    day: str | None = Query(default=None, alias="date"),
    exam_type: str = Query(default="upsc", alias="examType"),
    difficulty: str = "medium",
    count: int = Query(default=10, ge=1, le=Limits.MAX_QUIZ_QUESTIONS),
    category: str | None = None,
    service: CurrentAffairsService = Depends(get_current_affairs_service),
) -> dict:
    quiz = await service.quiz(_date_param(day), exam_type, difficulty, count, category)
    return {"success": True, "data": quiz}


@router.get("/trending")
def trending_topics(
    days: int = Query(default=7, ge=1, le=90),
    exam_type: str = Query(default="upsc", alias="examType"),
    limit: int = Query(default=15, ge=1, le=100),
    service: CurrentAffairsService = Depends(get_current_affairs_service),
) -> dict:
    return {"success": True, "data": service.trending(exam_type, days, limit)}


@router.get("/exam/{exam_type}")
def exam_current_affairs(
    exam_type: str,
    day: str | None = Query(default=None, alias="date"),
    limit: int = Query(default=25, ge=1, le=Limits.MAX_PAGE_SIZE),
    service: CurrentAffairsService = Depends(get_current_affairs_service),
) -> dict:
    return {"success": True, "data": service.for_exam(exam_type, _date_param(day), limit)}


@router.post("/refresh")
async def refresh_current_affairs(
    body: RefreshBody | None = None,
    service: CurrentAffairsService = Depends(get_current_affairs_service),
) -> dict:
    force_update = body.force_update if body else False
    return {"success": True, "data": await service.refresh(force_update)}


@router.get("/health")
def current_affairs_health(service: CurrentAffairsService = Depends(get_current_affairs_service)) -> dict:
    return {"success": True, "data": service.health()}


@router.get("/search")
def search_current_affairs(
    q: str | None = None,
    limit: int = Query(default=20, ge=1, le=Limits.MAX_PAGE_SIZE),
    service: CurrentAffairsService = Depends(get_current_affairs_service),
) -> dict:
    items = service.search(q, limit)
    return {"success": True, "data": {"query": q, "totalResults": len(items), "results": items}}


@router.get("/statistics")
def current_affairs_statistics(service: CurrentAffairsService = Depends(get_current_affairs_service)) -> dict:
    return {"success": True, "data": service.statistics()}
