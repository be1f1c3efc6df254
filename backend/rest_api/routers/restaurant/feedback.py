"""
Feedback endpoints. Responses use the {success, data, message} envelope.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rest_api.schemas.common import Envelope
from rest_api.schemas.robot import FeedbackCreate, FeedbackOutput, FeedbackUpdate
from rest_api.services.domain import FeedbackService
from shared.infrastructure.db import get_db

router = APIRouter(prefix="/feedback/{restaurant_id}", tags=["feedback"])


@router.get("", response_model=Envelope[list[FeedbackOutput]])
def list_feedback(restaurant_id: str, db: Session = Depends(get_db)):
    items = FeedbackService(db).list_all(restaurant_id)
    return Envelope(data=items, message=f"{len(items)} feedback entries found")


@router.get("/order/{order_id}", response_model=Envelope[list[FeedbackOutput]])
def list_order_feedback(restaurant_id: str, order_id: str, db: Session = Depends(get_db)):
    return Envelope(data=FeedbackService(db).list_for_order(restaurant_id, order_id))


@router.get("/customer/{customer_id}", response_model=Envelope[list[FeedbackOutput]])
def list_customer_feedback(restaurant_id: str, customer_id: str, db: Session = Depends(get_db)):
    return Envelope(data=FeedbackService(db).list_for_customer(restaurant_id, customer_id))


@router.get("/{feedback_id}", response_model=Envelope[FeedbackOutput])
def get_feedback(restaurant_id: str, feedback_id: str, db: Session = Depends(get_db)):
    return Envelope(data=FeedbackService(db).get_by_id(feedback_id, restaurant_id))


@router.post("", response_model=Envelope[FeedbackOutput], status_code=status.HTTP_201_CREATED)
def create_feedback(restaurant_id: str, body: FeedbackCreate, db: Session = Depends(get_db)):
    feedback = FeedbackService(db).create(body.model_dump(exclude_none=True), restaurant_id)
    return Envelope(data=feedback, message="Feedback created successfully")


@router.put("/{feedback_id}", response_model=Envelope[FeedbackOutput])
def update_feedback(restaurant_id: str, feedback_id: str, body: FeedbackUpdate, db: Session = Depends(get_db)):
    feedback = FeedbackService(db).update(feedback_id, body.model_dump(exclude_none=True), restaurant_id)
    return Envelope(data=feedback, message="Feedback updated successfully")


@router.delete("/{feedback_id}", response_model=Envelope[None])
def delete_feedback(restaurant_id: str, feedback_id: str, db: Session = Depends(get_db)):
    FeedbackService(db).delete(feedback_id, restaurant_id)
    return Envelope(message="Feedback deleted successfully")
