"""
Dining table endpoints. Tables are addressed by their number inside the restaurant.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.schemas.common import MessageResponse
from rest_api.schemas.order import TableCreate, TableOutput, TableUpdate
from rest_api.services.domain import TableService
from shared.infrastructure.db import get_db

router = APIRouter(prefix="/Table/{restaurant_id}", tags=["table"])


@router.get("", response_model=list[TableOutput])
def list_tables(restaurant_id: str, db: Session = Depends(get_db)) -> list[TableOutput]:
    return TableService(db).list_all(restaurant_id)


@router.get("/customer/{customer_id}", response_model=list[TableOutput])
def list_customer_tables(restaurant_id: str, customer_id: str, db: Session = Depends(get_db)) -> list[TableOutput]:
    return TableService(db).list_for_customer(restaurant_id, customer_id)


@router.get("/{table_no}", response_model=TableOutput)
def get_table(restaurant_id: str, table_no: int, db: Session = Depends(get_db)) -> TableOutput:
    return TableService(db).get_by_id(table_no, restaurant_id)


@router.post("", response_model=TableOutput, status_code=status.HTTP_201_CREATED)
def create_table(restaurant_id: str, body: TableCreate, db: Session = Depends(get_db)) -> TableOutput:
    return TableService(db).create(body.model_dump(), restaurant_id)


@router.put("/{table_no}", response_model=TableOutput)
def update_table(
    restaurant_id: str,
    table_no: int,
    body: TableUpdate,
    db: Session = Depends(get_db),
) -> TableOutput:
    """Seat or clear a customer / order. An explicit null clears the link."""
    return TableService(db).update(table_no, body.model_dump(exclude_unset=True), restaurant_id)


@router.delete("/{table_no}", response_model=MessageResponse)
def delete_table(restaurant_id: str, table_no: int, db: Session = Depends(get_db)) -> MessageResponse:
    TableService(db).delete(table_no, restaurant_id)
    return MessageResponse(message="Table deleted successfully")
