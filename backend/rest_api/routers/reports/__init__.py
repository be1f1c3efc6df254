"""
Reporting API: order report statistics and business insights.
"""

from fastapi import APIRouter

from .order_report import router as order_report_router
from .insights import router as insights_router

router = APIRouter()

router.include_router(order_report_router)
router.include_router(insights_router)
