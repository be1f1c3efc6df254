"""
Restaurant schemas.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .common import ALIASED


class RestaurantOutput(BaseModel):
    restaurant_id: str = Field(alias="Restaurant Id")
    name_id: str | None = Field(default=None, alias="Name Id")
    location_id: str | None = Field(default=None, alias="Location Id")
    logo: dict[str, Any] = Field(default_factory=dict, alias="Restaurant logo")
    created_at: datetime | None = None

    model_config = ALIASED


class RestaurantCreate(BaseModel):
    name_id: str | None = Field(default=None, alias="Name Id")
    location_id: str | None = Field(default=None, alias="Location Id")
    logo: dict[str, Any] | None = Field(default=None, alias="Restaurant logo")

    model_config = ALIASED


class RestaurantUpdate(RestaurantCreate):
    pass
