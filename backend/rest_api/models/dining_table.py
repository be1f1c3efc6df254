"""
Dining table of a restaurant, optionally seating a customer with an order.
"""

from __future__ import annotations

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class DiningTable(TimestampMixin, Base):
    """
    Identity is (Restaurant Id, Table No). Customer ID and Order Id are set
    when a customer is seated or orders, and cleared when the table frees up.
    """

    __tablename__ = "Table"

    restaurant_id: Mapped[str] = mapped_column("Restaurant Id", String(50), primary_key=True)
    table_no: Mapped[int] = mapped_column("Table No", Integer, primary_key=True, autoincrement=False)
    customer_id: Mapped[str | None] = mapped_column("Customer ID", String(50))
    order_id: Mapped[str | None] = mapped_column("Order Id", String(50))

    __table_args__ = (Index("ix_table_customer", "Restaurant Id", "Customer ID"),)
