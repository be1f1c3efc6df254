"""
Restaurant Service.

Restaurants are the tenant root; ids are allocated as restro-N.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Restaurant
from rest_api.repositories import RestaurantRepository
from rest_api.schemas.restaurant import RestaurantOutput
from rest_api.services.base_service import BaseCRUDService
from shared.config.logging import get_logger

logger = get_logger(__name__)


class RestaurantService(BaseCRUDService[Restaurant, RestaurantOutput]):
    """Service for tenant (restaurant) records."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=RestaurantRepository(db),
            output_schema=RestaurantOutput,
            entity_name="Restaurant",
        )

    def _prepare_create(self, data: dict[str, Any], restaurant_id: str | None) -> dict[str, Any]:
        data["restaurant_id"] = self._repo.allocate_id()
        if data.get("logo") is None:
            data["logo"] = {}
        return data

    def _prepare_update(self, entity: Restaurant, data: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in data.items() if v is not None}

    def _after_create(self, entity: Restaurant) -> None:
        logger.info("Restaurant created", restaurant_id=entity.restaurant_id)
