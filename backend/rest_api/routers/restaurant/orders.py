"""
Order endpoints.

Placement and updates go through OrderService so the amount, dish checks,
status transitions and table link stay in one transaction.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rest_api.repositories import OrderFilters
from rest_api.routers._common.pagination import Pagination, get_pagination
from rest_api.schemas.common import MessageResponse
from rest_api.schemas.order import OrderCreate, OrderOutput, OrderStatusUpdate, OrderUpdate
from rest_api.services.domain import OrderService
from shared.infrastructure.db import get_db

router = APIRouter(prefix="/Order/{restaurant_id}", tags=["order"])


@router.get("", response_model=list[OrderOutput])
def list_orders(
    restaurant_id: str,
    payment_status: str | None = Query(default=None, alias="paymentStatus"),
    serving_status: str | None = Query(default=None, alias="servingStatus"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
) -> list[OrderOutput]:
    filters = OrderFilters(
        limit=pagination.limit,
        offset=pagination.offset,
        payment_status=payment_status.upper() if payment_status else None,
        serving_status=serving_status.upper() if serving_status else None,
        start_date=start_date,
        end_date=end_date,
    )
    return OrderService(db).list_filtered(restaurant_id, filters)


@router.get("/customer/{customer_id}", response_model=list[OrderOutput])
def list_customer_orders(restaurant_id: str, customer_id: str, db: Session = Depends(get_db)) -> list[OrderOutput]:
    return OrderService(db).list_by_customer(restaurant_id, customer_id)


@router.get("/{order_id}", response_model=OrderOutput)
def get_order(restaurant_id: str, order_id: str, db: Session = Depends(get_db)) -> OrderOutput:
    return OrderService(db).get_by_id(order_id, restaurant_id)


@router.post("", response_model=OrderOutput, status_code=status.HTTP_201_CREATED)
def create_order(restaurant_id: str, body: OrderCreate, db: Session = Depends(get_db)) -> OrderOutput:
    return OrderService(db).create(body.model_dump(exclude_none=True), restaurant_id)


@router.put("/{order_id}", response_model=OrderOutput)
def update_order(
    restaurant_id: str,
    order_id: str,
    body: OrderUpdate,
    db: Session = Depends(get_db),
) -> OrderOutput:
    """Dish lines are appended; their cost is added to the amount."""
    return OrderService(db).update(order_id, body.model_dump(exclude_none=True), restaurant_id)


@router.patch("/{order_id}/status", response_model=OrderOutput)
def update_order_status(
    restaurant_id: str,
    order_id: str,
    body: OrderStatusUpdate,
    db: Session = Depends(get_db),
) -> OrderOutput:
    return OrderService(db).update_status(
        order_id,
        restaurant_id,
        payment_status=body.payment_status,
        serving_status=body.serving_status,
    )


@router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(restaurant_id: str, order_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    OrderService(db).delete(order_id, restaurant_id)
    return MessageResponse(message="Order deleted successfully")
