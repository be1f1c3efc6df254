"""
Restaurant (tenant) endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.schemas.common import MessageResponse
from rest_api.schemas.restaurant import RestaurantCreate, RestaurantOutput, RestaurantUpdate
from rest_api.services.domain import RestaurantService
from shared.infrastructure.db import get_db

router = APIRouter(prefix="/restaurant", tags=["restaurant"])


@router.get("", response_model=list[RestaurantOutput])
def list_restaurants(db: Session = Depends(get_db)) -> list[RestaurantOutput]:
    return RestaurantService(db).list_all()


@router.post("", response_model=RestaurantOutput, status_code=status.HTTP_201_CREATED)
def create_restaurant(body: RestaurantCreate, db: Session = Depends(get_db)) -> RestaurantOutput:
    return RestaurantService(db).create(body.model_dump(exclude_none=True))


@router.put("/{restaurant_id}", response_model=RestaurantOutput)
def update_restaurant(
    restaurant_id: str,
    body: RestaurantUpdate,
    db: Session = Depends(get_db),
) -> RestaurantOutput:
    return RestaurantService(db).update(restaurant_id, body.model_dump(exclude_unset=True))


@router.delete("/{restaurant_id}", response_model=MessageResponse)
def delete_restaurant(restaurant_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    RestaurantService(db).delete(restaurant_id)
    return MessageResponse(message="Restaurant deleted successfully")
