"""
Robot Call Service.

CLEAN-ARCH: A customer asks for a robot at their table:
1. A pending Robot_Call_Request row is stored
2. The robot server is asked to dispatch
3. The row becomes "dispatched" or "failed"
4. A robot-called event is published for live dashboards

The robot server (or staff) later reports progress through update_status,
which publishes robot-status-updated.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

import redis.asyncio as redis
from sqlalchemy.orm import Session

from rest_api.models import RobotCallRequest
from rest_api.repositories import RobotCallRepository
from rest_api.schemas.common import dump
from rest_api.schemas.robot import RobotCallOutput
from rest_api.services.base_service import BaseService
from rest_api.services.external.robot_dispatch import RobotDispatchClient, robot_dispatch_client
from shared.config.constants import RobotCallStatus
from shared.config.logging import robot_logger as logger
from shared.infrastructure.events import (
    ROBOT_CALLED,
    ROBOT_STATUS_UPDATED,
    get_redis_client,
    publish_robot_call_event,
)
from shared.utils.exceptions import NotFoundError, ValidationError

EventSink = Callable[[str, dict[str, Any], str | None], Awaitable[None]]


async def publish_to_redis(event_type: str, call: dict[str, Any], restaurant_id: str | None) -> None:
    """
    Best-effort realtime notification. A Redis outage never fails the
    robot call itself.
    """
    try:
        redis_client = await get_redis_client()
        await publish_robot_call_event(redis_client, event_type, call, restaurant_id)
    except (redis.RedisError, OSError, ValueError) as e:
        logger.warning("Robot call event not published", event_type=event_type, error=str(e))


class RobotCallService(BaseService[RobotCallRequest]):
    """Service for table-side robot calls."""

    def __init__(
        self,
        db: Session,
        dispatcher: RobotDispatchClient | None = None,
        event_sink: EventSink | None = None,
    ):
        super().__init__(db, RobotCallRepository(db))
        self._dispatcher = dispatcher or robot_dispatch_client
        self._event_sink = event_sink or publish_to_redis

    def to_output(self, call: RobotCallRequest) -> RobotCallOutput:
        return RobotCallOutput.model_validate(call)

    # =========================================================================
    # Commands
    # =========================================================================

    async def call_robot(self, table_no: int | None, restaurant_id: str | None = None) -> tuple[bool, str, RobotCallOutput]:
        """
        Record the call and ask the robot server to dispatch.

        Returns:
            (dispatched, message, stored request)

        Raises:
            ValidationError: No table number.
        """
        if not table_no:
            raise ValidationError("Table number is required")

        call = RobotCallRequest(
            restaurant_id=restaurant_id,
            table_no=table_no,
            status=RobotCallStatus.PENDING.value,
        )
        self._db.add(call)
        self._commit("create robot call", table_no=table_no)
        self._db.refresh(call)

        result = await self._dispatcher.dispatch(table_no)
        call.status = (RobotCallStatus.DISPATCHED if result.success else RobotCallStatus.FAILED).value
        self._commit("update robot call", request_id=call.id)
        self._db.refresh(call)

        output = self.to_output(call)
        await self._event_sink(ROBOT_CALLED, dump(output), restaurant_id)

        if result.success:
            logger.info("Robot dispatched", request_id=call.id, table_no=table_no)
            return True, f"Robot called to table {table_no} successfully", output

        logger.warning(
            "Robot dispatch failed",
            request_id=call.id,
            table_no=table_no,
            status_code=result.status_code,
            error=result.error,
        )
        return False, f"Failed to call robot to table {table_no}", output

    async def update_status(
        self,
        status: str | None,
        request_id: int | None = None,
        table_no: int | None = None,
        restaurant_id: str | None = None,
    ) -> RobotCallOutput:
        """
        Set the status of a call, addressed by request id or by the latest
        call for a table.

        Raises:
            ValidationError: Missing target or unknown status.
            NotFoundError: No matching call.
        """
        if not status or (request_id is None and table_no is None):
            raise ValidationError("Request id (or table number) and status are required")
        allowed = [s.value for s in RobotCallStatus]
        if status not in allowed:
            raise ValidationError(f"Status must be one of: {', '.join(allowed)}")

        if request_id is not None:
            call = self._repo.find_by_id(request_id, restaurant_id)
        else:
            call = self._repo.find_latest_for_table(table_no, restaurant_id)
        if call is None:
            raise NotFoundError("Robot call", request_id if request_id is not None else table_no)

        call.status = status
        self._commit("update robot call status", request_id=call.id)
        self._db.refresh(call)

        output = self.to_output(call)
        await self._event_sink(ROBOT_STATUS_UPDATED, dump(output), call.restaurant_id)
        logger.info("Robot call status updated", request_id=call.id, status=status)
        return output

    # =========================================================================
    # Queries
    # =========================================================================

    def latest_for_table(self, table_no: int, restaurant_id: str | None = None) -> RobotCallOutput:
        call = self._repo.find_latest_for_table(table_no, restaurant_id)
        if call is None:
            raise NotFoundError("Robot call", detail=f"No robot call found for table {table_no}")
        return self.to_output(call)

    def pending(self, restaurant_id: str | None = None) -> list[RobotCallOutput]:
        return [self.to_output(c) for c in self._repo.find_pending(restaurant_id)]
