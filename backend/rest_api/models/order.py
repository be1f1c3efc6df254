"""
Order: a customer's order with its dish lines and lifecycle statuses.
"""

from __future__ import annotations

from datetime import date, time

from sqlalchemy import Date, Float, Index, Integer, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import PaymentStatus, ServingStatus
from shared.utils.json_columns import JSONList
from .base import Base, TimestampMixin


class Order(TimestampMixin, Base):
    """
    Dishes is a JSON list of {"DishId": str, "Quantity": int} lines.
    Amount is the sum of price x quantity at the time each line was added.
    """

    __tablename__ = "Order"

    order_id: Mapped[str] = mapped_column("Order Id", String(50), primary_key=True)  # ORDER-N
    customer_id: Mapped[str] = mapped_column("Customer Id", String(50), nullable=False)
    restaurant_id: Mapped[str] = mapped_column("Restaurant Id", String(50), nullable=False)
    table_no: Mapped[int | None] = mapped_column("Table No", Integer)
    amount: Mapped[float] = mapped_column("Amount", Float, nullable=False, default=0)
    dishes: Mapped[list] = mapped_column("Dishes", JSONList, default=list)
    order_date: Mapped[date] = mapped_column("Date", Date, nullable=False)
    order_time: Mapped[time] = mapped_column("Time", Time, nullable=False)
    payment_status: Mapped[str] = mapped_column(
        "Payment Status", String(20), default=PaymentStatus.PENDING.value, nullable=False
    )
    serving_status: Mapped[str] = mapped_column(
        "Serving Status", String(20), default=ServingStatus.PENDING.value, nullable=False
    )

    __table_args__ = (
        Index("ix_order_restaurant_date", "Restaurant Id", "Date"),
        Index("ix_order_customer", "Customer Id"),
    )
