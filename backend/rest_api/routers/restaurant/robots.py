"""
Delivery robot endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.schemas.common import MessageResponse
from rest_api.schemas.robot import RobotCreate, RobotOutput, RobotUpdate
from rest_api.services.domain import RobotService
from shared.infrastructure.db import get_db

router = APIRouter(prefix="/Robot", tags=["robot"])


@router.get("", response_model=list[RobotOutput])
def list_robots(db: Session = Depends(get_db)) -> list[RobotOutput]:
    return RobotService(db).list_robots()


@router.get("/order/{order_id}", response_model=list[RobotOutput])
def list_order_robots(order_id: str, db: Session = Depends(get_db)) -> list[RobotOutput]:
    return RobotService(db).list_for_order(order_id)


@router.get("/customer/{customer_id}", response_model=list[RobotOutput])
def list_customer_robots(customer_id: str, db: Session = Depends(get_db)) -> list[RobotOutput]:
    return RobotService(db).list_for_customer(customer_id)


@router.get("/{robot_id}", response_model=RobotOutput)
def get_robot(robot_id: str, db: Session = Depends(get_db)) -> RobotOutput:
    return RobotService(db).get_by_id(robot_id)


@router.post("", response_model=RobotOutput, status_code=status.HTTP_201_CREATED)
def create_robot(body: RobotCreate, db: Session = Depends(get_db)) -> RobotOutput:
    return RobotService(db).create(body.model_dump(exclude_none=True))


@router.put("/{robot_id}", response_model=RobotOutput)
def update_robot(robot_id: str, body: RobotUpdate, db: Session = Depends(get_db)) -> RobotOutput:
    return RobotService(db).update(robot_id, body.model_dump(exclude_unset=True))


@router.delete("/{robot_id}", response_model=MessageResponse)
def delete_robot(robot_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    RobotService(db).delete(robot_id)
    return MessageResponse(message="Robot deleted successfully")
