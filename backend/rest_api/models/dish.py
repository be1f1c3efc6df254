"""
Dish: a menu item of one restaurant.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.utils.json_columns import JSONList
from .base import Base, TimestampMixin


class Dish(TimestampMixin, Base):
    __tablename__ = "Dish"

    dish_id: Mapped[str] = mapped_column("Dish Id", String(50), primary_key=True)  # DISH-N
    restaurant_id: Mapped[str] = mapped_column("Restaurant Id", String(50), nullable=False)
    name: Mapped[str] = mapped_column("Name", String(200), nullable=False)
    description: Mapped[str | None] = mapped_column("Description", Text)
    price: Mapped[float] = mapped_column("Price", Float, nullable=False)
    rating: Mapped[float | None] = mapped_column("Rating", Float)
    cooking_time: Mapped[int | None] = mapped_column("Cooking Time", Integer)  # minutes
    type_of_dish: Mapped[list] = mapped_column("Type of Dish", JSONList, default=list)
    genre_of_taste: Mapped[list] = mapped_column("Genre of Taste", JSONList, default=list)
    images: Mapped[list] = mapped_column("Images", JSONList, default=list)
    available: Mapped[bool] = mapped_column("Available", Boolean, default=True, nullable=False)

    __table_args__ = (Index("ix_dish_restaurant", "Restaurant Id"),)
