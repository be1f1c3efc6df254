"""
Dish Repository.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session, InstrumentedAttribute

from rest_api.models import Dish
from shared.config.constants import IdPrefix
from .base import BaseRepository


class DishRepository(BaseRepository[Dish]):
    id_prefix = IdPrefix.DISH

    @property
    def model(self) -> type[Dish]:
        return Dish

    @property
    def id_column(self) -> InstrumentedAttribute:
        return Dish.dish_id

    def find_many(self, dish_ids: list[str], restaurant_id: str | None = None) -> dict[str, Dish]:
        """Batch lookup keyed by dish id (missing ids are simply absent)."""
        if not dish_ids:
            return {}
        query = self._scoped(select(Dish).where(Dish.dish_id.in_(set(dish_ids))), restaurant_id)
        return {dish.dish_id: dish for dish in self._db.execute(query).scalars()}


def get_dish_repository(db: Session) -> DishRepository:
    return DishRepository(db)
