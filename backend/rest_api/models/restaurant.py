"""
Restaurant: the tenant root. Most other rows carry its Restaurant Id.
"""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from shared.utils.json_columns import JSONObject
from .base import Base, TimestampMixin


class Restaurant(TimestampMixin, Base):
    __tablename__ = "Restaurant"

    restaurant_id: Mapped[str] = mapped_column("Restaurant Id", String(50), primary_key=True)  # restro-N
    name_id: Mapped[str | None] = mapped_column("Name Id", String(200))
    location_id: Mapped[str | None] = mapped_column("Location Id", String(200))
    # Logo metadata, e.g. {"url": "...", "width": 120}
    logo: Mapped[dict] = mapped_column("Restaurant logo", JSONObject, default=dict)
