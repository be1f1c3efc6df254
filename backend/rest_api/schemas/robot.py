"""
Robot, robot-call and feedback schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .common import ALIASED


class RobotOutput(BaseModel):
    robot_id: str = Field(alias="Robot Id")
    order_id: str = Field(alias="Order Id")
    customer_id: str = Field(alias="Customer Id")
    restaurant_id: str | None = Field(default=None, alias="Restaurant Id")
    status: str = Field(alias="Status")

    model_config = ALIASED


class RobotCreate(BaseModel):
    order_id: str | None = Field(default=None, alias="Order Id")
    customer_id: str | None = Field(default=None, alias="Customer Id")
    restaurant_id: str | None = Field(default=None, alias="Restaurant Id")
    status: str | None = Field(default=None, alias="Status")

    model_config = ALIASED


class RobotUpdate(RobotCreate):
    pass


class RobotCallRequestBody(BaseModel):
    table_no: int | None = Field(default=None, ge=1, alias="tableNo")
    restaurant_id: str | None = Field(default=None, alias="restaurantId")

    model_config = ALIASED


class RobotStatusUpdateBody(BaseModel):
    request_id: int | None = Field(default=None, alias="requestId")
    table_no: int | None = Field(default=None, alias="tableNo")
    restaurant_id: str | None = Field(default=None, alias="restaurantId")
    status: str | None = None

    model_config = ALIASED


class RobotCallOutput(BaseModel):
    id: int
    restaurant_id: str | None = Field(default=None, alias="restaurantId")
    table_no: int = Field(alias="tableNo")
    status: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ALIASED


class RobotCallResponse(BaseModel):
    success: bool
    message: str
    request: RobotCallOutput


class FeedbackOutput(BaseModel):
    feedback_id: str = Field(alias="Feedback Id")
    restaurant_id: str = Field(alias="Restaurant Id")
    feedback: str = Field(alias="Feedback")
    order_id: str | None = Field(default=None, alias="Order Id")
    customer_id: str | None = Field(default=None, alias="Customer Id")
    created_at: datetime | None = Field(default=None, alias="Created At")

    model_config = ALIASED


class FeedbackCreate(BaseModel):
    feedback: str | None = Field(default=None, alias="Feedback")
    order_id: str | None = Field(default=None, alias="Order Id")
    customer_id: str | None = Field(default=None, alias="Customer Id")

    model_config = ALIASED


class FeedbackUpdate(FeedbackCreate):
    pass
