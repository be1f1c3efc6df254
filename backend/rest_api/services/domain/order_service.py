"""
Order Service.

CLEAN-ARCH: Handles the order lifecycle:
- Placement: line validation, amount from dish prices, table linkage
- Update: dish lines appended, their cost added to the amount
- Payment / serving status changes through the transition tables

Every write (order row plus table link) is committed as one unit; a failure
at any step leaves nothing behind.

Usage:
    from rest_api.services.domain import OrderService

    service = OrderService(db)
    order = service.create({"customer_id": "CUSTOMER-1", "dishes": [...]}, "restro-1")
    order = service.update("ORDER-4", {"dishes": [...]}, "restro-1")
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import DiningTable, Order
from rest_api.repositories import DiningTableRepository, DishRepository, OrderFilters, OrderRepository
from rest_api.schemas.order import OrderOutput
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.domain.order_rules import (
    check_payment_transition,
    check_serving_transition,
    lines_amount,
    missing_dish_ids,
    normalize_lines,
)
from shared.config.constants import PaymentStatus, ServingStatus
from shared.config.logging import orders_logger as logger
from shared.utils.exceptions import NotFoundError, ValidationError


class OrderService(BaseCRUDService[Order, OrderOutput]):
    """
    Service for restaurant orders.

    Business rules:
    - Customer Id and at least one dish line are required
    - Amount is computed from dish prices unless supplied
    - Unknown dish ids fail the whole placement (404)
    - The customer's lowest-numbered table is linked to the new order
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=OrderRepository(db),
            output_schema=OrderOutput,
            entity_name="Order",
        )
        self._dishes = DishRepository(db)
        self._tables = DiningTableRepository(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_filtered(self, restaurant_id: str, filters: OrderFilters) -> list[OrderOutput]:
        return self.to_outputs(self._repo.find_all(restaurant_id, filters))

    def list_by_customer(self, restaurant_id: str, customer_id: str) -> list[OrderOutput]:
        """
        Raises:
            NotFoundError: The customer has no orders in this restaurant.
        """
        orders = self._repo.find_by_customer(customer_id, restaurant_id)
        if not orders:
            raise NotFoundError(
                "Order", detail="No orders found for this customer", customer_id=customer_id
            )
        return self.to_outputs(orders)

    # =========================================================================
    # Placement
    # =========================================================================

    def create(self, data: dict[str, Any], restaurant_id: str | None = None) -> OrderOutput:
        """
        Place an order.

        Raises:
            ValidationError: Missing customer / dishes or a malformed line.
            NotFoundError: A dish id does not exist in the restaurant.
        """
        customer_id = data.get("customer_id")
        submitted_lines = data.get("dishes") or []
        if not customer_id or not restaurant_id or not submitted_lines:
            raise ValidationError("Customer ID and Dishes are required")

        lines = normalize_lines(submitted_lines)
        computed = self._price_lines(lines, restaurant_id)
        amount = data.get("amount")
        if amount is None:
            amount = computed

        now = datetime.now()
        order = Order(
            order_id=self._repo.allocate_id(),
            customer_id=customer_id,
            restaurant_id=restaurant_id,
            table_no=data.get("table_no"),
            amount=amount,
            dishes=lines,
            order_date=data.get("order_date") or now.date(),
            order_time=data.get("order_time") or now.time().replace(microsecond=0),
            payment_status=PaymentStatus.PENDING.value,
            serving_status=ServingStatus.PENDING.value,
        )
        table = self._tables.find_first_for_customer(restaurant_id, customer_id)
        if table is not None:
            self._link_table(table, order)
        self._db.add(order)

        self._commit("create order", restaurant_id=restaurant_id, customer_id=customer_id)
        self._db.refresh(order)

        logger.info(
            "Order created",
            order_id=order.order_id,
            restaurant_id=restaurant_id,
            customer_id=customer_id,
            amount=order.amount,
            lines=len(lines),
            table_no=order.table_no,
        )
        return self.to_output(order)

    # =========================================================================
    # Update
    # =========================================================================

    def update(self, entity_id: Any, data: dict[str, Any], restaurant_id: str | None = None) -> OrderOutput:
        """
        Append dish lines, replace supplied scalars, apply status changes.

        Raises:
            NotFoundError: Order or a referenced dish does not exist.
            ValidationError / InvalidTransitionError: Bad line or status change.
        """
        order = self.get_entity(entity_id, restaurant_id)
        statuses = self._resolve_statuses(order, data.get("payment_status"), data.get("serving_status"))

        lines: list[dict[str, Any]] = []
        added = 0.0
        if data.get("dishes"):
            lines = normalize_lines(data["dishes"])
            added = self._price_lines(lines, order.restaurant_id)

        # All checks passed; mutate
        if lines:
            order.dishes = list(order.dishes or []) + lines
            order.amount = round((order.amount or 0) + added, 2)
        if data.get("table_no") is not None:
            order.table_no = data["table_no"]
        for field_name, value in statuses.items():
            setattr(order, field_name, value)

        self._commit("update order", order_id=entity_id)
        self._db.refresh(order)

        logger.info("Order updated", order_id=order.order_id, amount=order.amount, lines=len(order.dishes))
        return self.to_output(order)

    def update_status(
        self,
        order_id: str,
        restaurant_id: str,
        payment_status: str | None = None,
        serving_status: str | None = None,
    ) -> OrderOutput:
        """
        Change payment and/or serving status.

        Raises:
            ValidationError: Neither status supplied.
            InvalidTransitionError: Change not allowed.
        """
        if payment_status is None and serving_status is None:
            raise ValidationError("Payment Status or Serving Status is required")

        order = self.get_entity(order_id, restaurant_id)
        for field_name, value in self._resolve_statuses(order, payment_status, serving_status).items():
            setattr(order, field_name, value)
        self._commit("update order status", order_id=order_id)
        self._db.refresh(order)
        return self.to_output(order)

    # =========================================================================
    # Delete
    # =========================================================================

    def delete(self, entity_id: Any, restaurant_id: str | None = None) -> None:
        """Delete the order and clear table rows that still point at it."""
        order = self.get_entity(entity_id, restaurant_id)
        for table in self._tables.find_by(order.restaurant_id, order_id=order.order_id):
            table.order_id = None
        self._db.delete(order)
        self._commit("delete order", order_id=entity_id)
        logger.info("Order deleted", order_id=entity_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _price_lines(self, lines: list[dict[str, Any]], restaurant_id: str) -> float:
        dishes = self._dishes.find_many([line["DishId"] for line in lines], restaurant_id)
        prices = {dish_id: dish.price for dish_id, dish in dishes.items()}
        missing = missing_dish_ids(lines, prices)
        if missing:
            raise NotFoundError("Dish", missing[0], restaurant_id=restaurant_id)
        return lines_amount(lines, prices)

    @staticmethod
    def _resolve_statuses(order: Order, payment_status: Any, serving_status: Any) -> dict[str, str]:
        changes = {}
        if payment_status is not None:
            changes["payment_status"] = check_payment_transition(order.payment_status, payment_status).value
        if serving_status is not None:
            changes["serving_status"] = check_serving_transition(order.serving_status, serving_status).value
        return changes

    @staticmethod
    def _link_table(table: DiningTable, order: Order) -> None:
        table.order_id = order.order_id
        if order.table_no is None:
            order.table_no = table.table_no
