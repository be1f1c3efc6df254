"""
Feedback Service.

Free-text feedback per restaurant, optionally tied to an order and a
customer. Ids are Fb-N with N counted inside the restaurant.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Feedback
from rest_api.repositories import FeedbackRepository
from rest_api.schemas.robot import FeedbackOutput
from rest_api.services.base_service import BaseCRUDService
from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError, ValidationError

logger = get_logger(__name__)


class FeedbackService(BaseCRUDService[Feedback, FeedbackOutput]):
    """Service for customer feedback."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=FeedbackRepository(db),
            output_schema=FeedbackOutput,
            entity_name="Feedback",
        )

    def get_entity(self, entity_id: Any, restaurant_id: str | None = None) -> Feedback:
        feedback = self._repo.find_by_id(entity_id, restaurant_id)
        if feedback is None:
            raise NotFoundError("Feedback", entity_id, detail="Feedback not found", restaurant_id=restaurant_id)
        return feedback

    def list_for_order(self, restaurant_id: str, order_id: str) -> list[FeedbackOutput]:
        return self.to_outputs(self._repo.find_by(restaurant_id, order_id=order_id))

    def list_for_customer(self, restaurant_id: str, customer_id: str) -> list[FeedbackOutput]:
        return self.to_outputs(self._repo.find_by(restaurant_id, customer_id=customer_id))

    def _validate_create(self, data: dict[str, Any], restaurant_id: str | None) -> None:
        if not data.get("feedback") or not str(data["feedback"]).strip():
            raise ValidationError("Feedback text is required")

    def _prepare_create(self, data: dict[str, Any], restaurant_id: str | None) -> dict[str, Any]:
        data = super()._prepare_create(data, restaurant_id)
        data["feedback_id"] = self._repo.allocate_id(restaurant_id)
        return data

    def _prepare_update(self, entity: Feedback, data: dict[str, Any]) -> dict[str, Any]:
        # Missing fields keep the stored values
        return {k: v for k, v in data.items() if v is not None}

    def _after_create(self, entity: Feedback) -> None:
        logger.info(
            "Feedback received",
            feedback_id=entity.feedback_id,
            restaurant_id=entity.restaurant_id,
            order_id=entity.order_id,
        )
