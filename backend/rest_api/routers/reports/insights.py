"""
Business insights endpoints.

Rule-based analytics (quick summary, health score, revenue, customers,
operations) work without any provider; the full analysis and
recommendations need the Gemini API.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.services.domain import BusinessInsightsService
from rest_api.services.domain.business_insights_service import default_range, parse_date_range
from shared.infrastructure.db import get_db

router = APIRouter(prefix="/api/insights", tags=["insights"])


def get_insights_service(db: Session = Depends(get_db)) -> BusinessInsightsService:
    return BusinessInsightsService(db)


@router.get("/health-check")
def insights_health_check(service: BusinessInsightsService = Depends(get_insights_service)) -> dict:
    return {
        "success": True,
        "message": "Business insights service is running",
        "aiConfigured": service.ai_configured,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("")
async def business_insights(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    service: BusinessInsightsService = Depends(get_insights_service),
) -> dict:
    """AI analysis, trend narrative and executive summary."""
    start, end = parse_date_range(start_date, end_date)
    return {"success": True, "data": await service.full_insights(start, end, restaurant_id)}


@router.get("/quick")
def quick_insights(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    service: BusinessInsightsService = Depends(get_insights_service),
) -> dict:
    start, end = default_range(start_date, end_date)
    return {"success": True, "data": service.quick(start, end, restaurant_id)}


@router.get("/health-score")
def health_score(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    service: BusinessInsightsService = Depends(get_insights_service),
) -> dict:
    start, end = default_range(start_date, end_date)
    return {"success": True, "data": service.health(start, end, restaurant_id)}


@router.get("/recommendations")
async def recommendations(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    rec_type: str | None = Query(default=None, alias="type"),
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    service: BusinessInsightsService = Depends(get_insights_service),
) -> dict:
    start, end = parse_date_range(start_date, end_date)
    return {"success": True, "data": await service.recommendations(start, end, restaurant_id, rec_type)}


@router.get("/revenue")
def revenue_insights(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    service: BusinessInsightsService = Depends(get_insights_service),
) -> dict:
    start, end = parse_date_range(start_date, end_date)
    return {"success": True, "data": service.revenue(start, end, restaurant_id)}


@router.get("/customers")
def customer_insights(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    service: BusinessInsightsService = Depends(get_insights_service),
) -> dict:
    start, end = parse_date_range(start_date, end_date)
    return {"success": True, "data": service.customers(start, end, restaurant_id)}


@router.get("/operations")
def operational_insights(
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    service: BusinessInsightsService = Depends(get_insights_service),
) -> dict:
    start, end = parse_date_range(start_date, end_date)
    return {"success": True, "data": service.operations(start, end, restaurant_id)}
