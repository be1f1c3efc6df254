"""
Order and dining table schemas.
"""

from datetime import date, time
from typing import Any

from pydantic import BaseModel, Field

from shared.config.constants import PaymentStatus, ServingStatus
from .common import ALIASED


class OrderLine(BaseModel):
    """One dish line. Validation of presence and positivity happens in the service."""

    dish_id: str | None = Field(default=None, alias="DishId")
    quantity: Any = Field(default=None, alias="Quantity")

    model_config = ALIASED


class OrderOutput(BaseModel):
    order_id: str = Field(alias="Order Id")
    customer_id: str = Field(alias="Customer Id")
    restaurant_id: str = Field(alias="Restaurant Id")
    table_no: int | None = Field(default=None, alias="Table No")
    amount: float = Field(alias="Amount")
    dishes: list = Field(default_factory=list, alias="Dishes")
    order_date: date = Field(alias="Date")
    order_time: time = Field(alias="Time")
    payment_status: str = Field(alias="Payment Status")
    serving_status: str = Field(alias="Serving Status")

    model_config = ALIASED


class OrderCreate(BaseModel):
    customer_id: str | None = Field(default=None, alias="Customer Id")
    table_no: int | None = Field(default=None, alias="Table No")
    amount: float | None = Field(default=None, ge=0, alias="Amount")
    dishes: list[OrderLine] | None = Field(default=None, alias="Dishes")
    order_date: date | None = Field(default=None, alias="Date")
    order_time: time | None = Field(default=None, alias="Time")

    model_config = ALIASED


class OrderUpdate(BaseModel):
    table_no: int | None = Field(default=None, alias="Table No")
    dishes: list[OrderLine] | None = Field(default=None, alias="Dishes")
    payment_status: PaymentStatus | None = Field(default=None, alias="Payment Status")
    serving_status: ServingStatus | None = Field(default=None, alias="Serving Status")

    model_config = ALIASED


class OrderStatusUpdate(BaseModel):
    payment_status: PaymentStatus | None = Field(default=None, alias="Payment Status")
    serving_status: ServingStatus | None = Field(default=None, alias="Serving Status")

    model_config = ALIASED


class TableOutput(BaseModel):
    restaurant_id: str = Field(alias="Restaurant Id")
    table_no: int = Field(alias="Table No")
    customer_id: str | None = Field(default=None, alias="Customer ID")
    order_id: str | None = Field(default=None, alias="Order Id")

    model_config = ALIASED


class TableCreate(BaseModel):
    table_no: int | None = Field(default=None, ge=1, alias="Table No")
    customer_id: str | None = Field(default=None, alias="Customer ID")
    order_id: str | None = Field(default=None, alias="Order Id")

    model_config = ALIASED


class TableUpdate(BaseModel):
    """Explicit null clears the link; an omitted key leaves it unchanged."""

    customer_id: str | None = Field(default=None, alias="Customer ID")
    order_id: str | None = Field(default=None, alias="Order Id")

    model_config = ALIASED
