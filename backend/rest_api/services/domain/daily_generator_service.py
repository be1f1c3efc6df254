"""
Daily current affairs generation, used by the scheduler and the CLI.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from rest_api.repositories import CurrentAffairRepository
from shared.config.logging import content_logger as logger

from .current_affairs_service import CurrentAffairsService


class DailyGeneratorService:
    def __init__(self, db: Session, content_service: CurrentAffairsService | None = None):
        self._items = CurrentAffairRepository(db)
        self._content = content_service or CurrentAffairsService(db)

    async def generate_daily(self, today: date | None = None) -> dict[str, Any]:
        """Generate today's items unless they already exist."""
        today = today or date.today()
        existing = self._items.count_for_date(today)
        if existing:
            logger.info("Daily content already present, skipping", date=today.isoformat(), count=existing)
            return {
                "success": True,
                "message": f"Data for {today.isoformat()} already exists",
                "count": existing,
                "generated": False,
                "date": today.isoformat(),
            }
        return await self.generate_for_date(today)

    async def generate_for_date(self, day: date) -> dict[str, Any]:
        """Generate items for a date regardless of what is stored (backfill)."""
        items = await self._content.fetch_and_store(day)
        logger.info("Daily content generated", date=day.isoformat(), count=len(items))
        return {
            "success": True,
            "message": f"Generated {len(items)} items for {day.isoformat()}",
            "count": len(items),
            "generated": True,
            "date": day.isoformat(),
        }
