"""
Restaurant Repository.
"""

from sqlalchemy.orm import Session, InstrumentedAttribute

from rest_api.models import Restaurant
from shared.config.constants import IdPrefix
from .base import BaseRepository


class RestaurantRepository(BaseRepository[Restaurant]):
    id_prefix = IdPrefix.RESTAURANT

    @property
    def model(self) -> type[Restaurant]:
        return Restaurant

    @property
    def id_column(self) -> InstrumentedAttribute:
        return Restaurant.restaurant_id


def get_restaurant_repository(db: Session) -> RestaurantRepository:
    return RestaurantRepository(db)
