"""
Order report endpoints: JSON statistics over a date window of orders.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.services.domain import OrderReportService
from shared.infrastructure.db import get_db
from shared.utils.exceptions import ExternalServiceError

router = APIRouter(prefix="/orderReport", tags=["order-report"])


@router.get("/statistics")
def order_statistics(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    db: Session = Depends(get_db),
) -> dict:
    """Statistics for the window (default: the last 30 days)."""
    return OrderReportService(db).statistics(restaurant_id, start_date, end_date)


@router.get("/preview")
def report_preview(
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    db: Session = Depends(get_db),
) -> dict:
    return OrderReportService(db).preview(restaurant_id)


@router.get("/health")
def report_health(db: Session = Depends(get_db)) -> dict:
    try:
        result = OrderReportService(db).health()
    except SQLAlchemyError as e:
        raise ExternalServiceError("database", is_unavailable=True, error=str(e))
    return {"status": "healthy", **result}
