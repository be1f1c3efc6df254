"""
Dining Table Service.

Tables are identified by (restaurant, table number). A table optionally
points at the customer seated there and at that customer's current order.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import DiningTable
from rest_api.repositories import DiningTableRepository
from rest_api.schemas.order import TableOutput
from rest_api.services.base_service import BaseCRUDService
from shared.config.logging import get_logger
from shared.utils.exceptions import DuplicateEntityError, NotFoundError, ValidationError

logger = get_logger(__name__)


class TableService(BaseCRUDService[DiningTable, TableOutput]):
    """Service for dining tables."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=DiningTableRepository(db),
            output_schema=TableOutput,
            entity_name="Table",
        )

    def list_for_customer(self, restaurant_id: str, customer_id: str) -> list[TableOutput]:
        """
        Raises:
            NotFoundError: No table seats this customer.
        """
        tables = self._repo.find_by(restaurant_id, customer_id=customer_id)
        if not tables:
            raise NotFoundError("Table", detail="No table found for this customer", customer_id=customer_id)
        return self.to_outputs(tables)

    def _validate_create(self, data: dict[str, Any], restaurant_id: str | None) -> None:
        table_no = data.get("table_no")
        if table_no is None:
            raise ValidationError("Table No is required")
        if self._repo.exists(table_no, restaurant_id):
            raise DuplicateEntityError("Table", table_no, restaurant_id=restaurant_id)

    def _after_update(self, entity: DiningTable) -> None:
        logger.info(
            "Table updated",
            restaurant_id=entity.restaurant_id,
            table_no=entity.table_no,
            customer_id=entity.customer_id,
            order_id=entity.order_id,
        )
