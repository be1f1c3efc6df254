"""
Feedback left by a customer about an order.
"""

from __future__ import annotations

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Feedback(TimestampMixin, Base):
    """Fb-N ids are counted per restaurant, hence the composite key."""

    __tablename__ = "Feedback"

    restaurant_id: Mapped[str] = mapped_column("Restaurant Id", String(50), primary_key=True)
    feedback_id: Mapped[str] = mapped_column("Feedback Id", String(50), primary_key=True)  # Fb-N
    feedback: Mapped[str] = mapped_column("Feedback", Text, nullable=False)
    order_id: Mapped[str | None] = mapped_column("Order Id", String(50))
    customer_id: Mapped[str | None] = mapped_column("Customer Id", String(50))

    __table_args__ = (
        Index("ix_feedback_order", "Order Id"),
        Index("ix_feedback_customer", "Customer Id"),
    )
