"""
Dish Service.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Dish
from rest_api.repositories import DishRepository
from rest_api.schemas.dish import DishOutput
from rest_api.services.base_service import BaseCRUDService
from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.json_columns import parse_json_list

logger = get_logger(__name__)

# Submitted as a list or as JSON text; stored through the JSONList column
_LIST_FIELDS = ("type_of_dish", "genre_of_taste", "images")


class DishService(BaseCRUDService[Dish, DishOutput]):
    """Service for restaurant menu dishes (DISH-N)."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=DishRepository(db),
            output_schema=DishOutput,
            entity_name="Dish",
        )

    def get_entity(self, entity_id: Any, restaurant_id: str | None = None) -> Dish:
        dish = self._repo.find_by_id(entity_id, restaurant_id)
        if dish is None:
            raise NotFoundError("Dish", entity_id, detail="Dish not found", restaurant_id=restaurant_id)
        return dish

    def list_menu(self, restaurant_id: str) -> list[DishOutput]:
        return self.to_outputs(self._repo.find_all(restaurant_id))

    def _validate_create(self, data: dict[str, Any], restaurant_id: str | None) -> None:
        if not data.get("name") or data.get("price") is None:
            raise ValidationError("Name and price are required")

    def _prepare_create(self, data: dict[str, Any], restaurant_id: str | None) -> dict[str, Any]:
        data = super()._prepare_create(data, restaurant_id)
        data["dish_id"] = self._repo.allocate_id()
        for field_name in _LIST_FIELDS:
            data[field_name] = parse_json_list(data.get(field_name), field_name)
        if data.get("available") is None:
            data["available"] = True
        return data

    def _prepare_update(self, entity: Dish, data: dict[str, Any]) -> dict[str, Any]:
        data = {k: v for k, v in data.items() if v is not None}
        for field_name in _LIST_FIELDS:
            if field_name in data:
                data[field_name] = parse_json_list(data[field_name], field_name)
        return data

    def _after_create(self, entity: Dish) -> None:
        logger.info(
            "Dish created",
            dish_id=entity.dish_id,
            restaurant_id=entity.restaurant_id,
            price=entity.price,
        )
