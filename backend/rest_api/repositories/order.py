"""
Order Repository - Data access for orders.
"""

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.orm import Session, InstrumentedAttribute

from rest_api.models import Order
from shared.config.constants import IdPrefix
from .base import BaseRepository, RepositoryFilters


@dataclass
class OrderFilters(RepositoryFilters):
    """Filters specific to orders."""

    customer_id: str | None = None
    payment_status: str | None = None
    serving_status: str | None = None
    start_date: date | None = None
    end_date: date | None = None


class OrderRepository(BaseRepository[Order]):
    id_prefix = IdPrefix.ORDER

    @property
    def model(self) -> type[Order]:
        return Order

    @property
    def id_column(self) -> InstrumentedAttribute:
        return Order.order_id

    def _base_query(self, restaurant_id: str | None) -> Select:
        return self._scoped(select(Order), restaurant_id).order_by(
            Order.order_date.desc(), Order.order_time.desc(), Order.order_id.desc()
        )

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, OrderFilters):
            return query
        if filters.customer_id:
            query = query.where(Order.customer_id == filters.customer_id)
        if filters.payment_status:
            query = query.where(Order.payment_status == filters.payment_status)
        if filters.serving_status:
            query = query.where(Order.serving_status == filters.serving_status)
        if filters.start_date:
            query = query.where(Order.order_date >= filters.start_date)
        if filters.end_date:
            query = query.where(Order.order_date <= filters.end_date)
        return query

    def find_by_customer(self, customer_id: str, restaurant_id: str | None = None) -> Sequence[Order]:
        return self.find_by(restaurant_id, customer_id=customer_id)

    def find_in_range(
        self,
        start_date: date,
        end_date: date,
        restaurant_id: str | None = None,
    ) -> Sequence[Order]:
        """All orders dated within [start_date, end_date], newest first."""
        query = self._base_query(restaurant_id).where(
            Order.order_date >= start_date, Order.order_date <= end_date
        )
        return self._db.execute(query).scalars().all()

    def find_recent(self, limit: int, restaurant_id: str | None = None) -> Sequence[Order]:
        return self._db.execute(self._base_query(restaurant_id).limit(limit)).scalars().all()


def get_order_repository(db: Session) -> OrderRepository:
    return OrderRepository(db)
