"""
Delivery robots and robot-call requests.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import RobotCallStatus
from .base import Base, TimestampMixin, utcnow


class Robot(TimestampMixin, Base):
    """Food delivery robot assigned to an order."""

    __tablename__ = "Robot"

    robot_id: Mapped[str] = mapped_column("Robot Id", String(50), primary_key=True)  # ROBOT-N
    order_id: Mapped[str] = mapped_column("Order Id", String(50), nullable=False)
    customer_id: Mapped[str] = mapped_column("Customer Id", String(50), nullable=False)
    restaurant_id: Mapped[str | None] = mapped_column("Restaurant Id", String(50))
    status: Mapped[str] = mapped_column("Status", String(30), default="Assigned", nullable=False)

    __table_args__ = (
        Index("ix_robot_order", "Order Id"),
        Index("ix_robot_customer", "Customer Id"),
    )


class RobotCallRequest(Base):
    """A request, made from a table, to send a robot to it."""

    __tablename__ = "Robot_Call_Request"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    restaurant_id: Mapped[str | None] = mapped_column(String(50))
    table_no: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=RobotCallStatus.PENDING.value, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_robot_call_table", "table_no", "created_at"),
        Index("ix_robot_call_status", "status"),
    )
