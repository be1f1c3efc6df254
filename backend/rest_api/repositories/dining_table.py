"""
Dining Table Repository.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session, InstrumentedAttribute

from rest_api.models import DiningTable
from .base import BaseRepository


class DiningTableRepository(BaseRepository[DiningTable]):
    """Tables are keyed by (restaurant, table number); ids are not generated."""

    @property
    def model(self) -> type[DiningTable]:
        return DiningTable

    @property
    def id_column(self) -> InstrumentedAttribute:
        return DiningTable.table_no

    def find_first_for_customer(self, restaurant_id: str, customer_id: str) -> DiningTable | None:
        """Lowest-numbered table seating the customer."""
        query = (
            select(DiningTable)
            .where(
                DiningTable.restaurant_id == restaurant_id,
                DiningTable.customer_id == customer_id,
            )
            .order_by(DiningTable.table_no)
            .limit(1)
        )
        return self._db.scalar(query)


def get_dining_table_repository(db: Session) -> DiningTableRepository:
    return DiningTableRepository(db)
