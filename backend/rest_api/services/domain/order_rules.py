"""
Order rules that need no database: dish line normalization, amount
computation and status transitions.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from shared.config.constants import (
    Limits,
    PAYMENT_TRANSITIONS,
    SERVING_TRANSITIONS,
    PaymentStatus,
    ServingStatus,
)
from shared.utils.exceptions import InvalidTransitionError, ValidationError

INVALID_LINE_MESSAGE = "Each dish must have a 'DishId' and a positive 'Quantity'"


def _as_quantity(value: Any) -> int | None:
    """Positive whole number from an int, an integral float or a digit string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        quantity = value
    elif isinstance(value, float) and value.is_integer():
        quantity = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        quantity = int(value.strip())
    else:
        return None
    if quantity < Limits.MIN_QUANTITY or quantity > Limits.MAX_QUANTITY:
        return None
    return quantity


def normalize_lines(lines: Iterable[Any]) -> list[dict[str, Any]]:
    """
    Turn submitted dish lines into stored {"DishId", "Quantity"} dicts.

    Accepts pydantic OrderLine objects or plain dicts (aliased or snake_case).

    Raises:
        ValidationError: A line lacks a dish id or a positive quantity.
    """
    normalized = []
    for line in lines:
        if isinstance(line, Mapping):
            dish_id = line.get("DishId", line.get("dish_id"))
            raw_quantity = line.get("Quantity", line.get("quantity"))
        else:
            dish_id = getattr(line, "dish_id", None)
            raw_quantity = getattr(line, "quantity", None)

        quantity = _as_quantity(raw_quantity)
        if not dish_id or quantity is None:
            raise ValidationError(INVALID_LINE_MESSAGE, dish_id=dish_id)
        normalized.append({"DishId": str(dish_id), "Quantity": quantity})
    return normalized


def missing_dish_ids(lines: list[dict[str, Any]], prices: Mapping[str, float]) -> list[str]:
    """Dish ids referenced by lines that have no known price, in line order."""
    seen = set()
    missing = []
    for line in lines:
        dish_id = line["DishId"]
        if dish_id not in prices and dish_id not in seen:
            missing.append(dish_id)
        seen.add(dish_id)
    return missing


def lines_amount(lines: list[dict[str, Any]], prices: Mapping[str, float]) -> float:
    """Sum of price x quantity over the lines. Every dish id must be priced."""
    return round(sum(prices[line["DishId"]] * line["Quantity"] for line in lines), 2)


def check_payment_transition(current: str, target: str) -> PaymentStatus:
    """
    Validate a payment status change. Re-applying the current status is a no-op.

    Raises:
        ValidationError: Unknown status value.
        InvalidTransitionError: Change not allowed from the current status.
    """
    new_status = _coerce(PaymentStatus, target, "Payment Status")
    old_status = _coerce(PaymentStatus, current, "Payment Status")
    if new_status != old_status and new_status not in PAYMENT_TRANSITIONS[old_status]:
        raise InvalidTransitionError("payment", old_status.value, new_status.value)
    return new_status


def check_serving_transition(current: str, target: str) -> ServingStatus:
    """
    Validate a serving status change. Re-applying the current status is a no-op.

    Raises:
        ValidationError: Unknown status value.
        InvalidTransitionError: Change not allowed from the current status.
    """
    new_status = _coerce(ServingStatus, target, "Serving Status")
    old_status = _coerce(ServingStatus, current, "Serving Status")
    if new_status != old_status and new_status not in SERVING_TRANSITIONS[old_status]:
        raise InvalidTransitionError("serving", old_status.value, new_status.value)
    return new_status


def _coerce(enum_cls, value: Any, field_name: str):
    try:
        return enum_cls(value.value if isinstance(value, enum_cls) else str(value).upper())
    except ValueError:
        allowed = ", ".join(s.value for s in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")
