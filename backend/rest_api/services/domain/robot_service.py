"""
Robot Service.

Delivery robots assigned to an order (ROBOT-N). Lookups that return lists
report 404 when nothing matches.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Robot
from rest_api.repositories import RobotRepository
from rest_api.schemas.robot import RobotOutput
from rest_api.services.base_service import BaseCRUDService
from shared.config.logging import robot_logger as logger
from shared.utils.exceptions import NotFoundError, ValidationError

DEFAULT_ROBOT_STATUS = "Assigned"


class RobotService(BaseCRUDService[Robot, RobotOutput]):
    """Service for delivery robots."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=RobotRepository(db),
            output_schema=RobotOutput,
            entity_name="Robot",
        )

    def get_entity(self, entity_id: Any, restaurant_id: str | None = None) -> Robot:
        robot = self._repo.find_by_id(entity_id)
        if robot is None:
            raise NotFoundError("Robot", entity_id, detail="Robot not found")
        return robot

    def list_robots(self) -> list[RobotOutput]:
        robots = self._repo.find_by()
        if not robots:
            raise NotFoundError("Robot", detail="No robots found")
        return self.to_outputs(robots)

    def list_for_order(self, order_id: str) -> list[RobotOutput]:
        robots = self._repo.find_by(order_id=order_id)
        if not robots:
            raise NotFoundError("Robot", detail="No robots found for this order", order_id=order_id)
        return self.to_outputs(robots)

    def list_for_customer(self, customer_id: str) -> list[RobotOutput]:
        robots = self._repo.find_by(customer_id=customer_id)
        if not robots:
            raise NotFoundError("Robot", detail="No robots found for this customer", customer_id=customer_id)
        return self.to_outputs(robots)

    def _validate_create(self, data: dict[str, Any], restaurant_id: str | None) -> None:
        if not data.get("order_id") or not data.get("customer_id"):
            raise ValidationError("Order ID and Customer ID are required")

    def _prepare_create(self, data: dict[str, Any], restaurant_id: str | None) -> dict[str, Any]:
        data["robot_id"] = self._repo.allocate_id()
        data["status"] = data.get("status") or DEFAULT_ROBOT_STATUS
        return data

    def _prepare_update(self, entity: Robot, data: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in data.items() if v is not None}

    def _after_create(self, entity: Robot) -> None:
        logger.info("Robot assigned", robot_id=entity.robot_id, order_id=entity.order_id)
