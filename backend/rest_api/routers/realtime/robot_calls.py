"""
Robot call endpoints and the live robot-call WebSocket.

HTTP handlers persist calls through RobotCallService, which publishes
robot-called / robot-status-updated events to Redis. The WebSocket relays
those events to dashboards subscribed to the global or a restaurant channel.
"""

from __future__ import annotations

import asyncio
import contextlib

import redis.asyncio as redis
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from rest_api.schemas.robot import (
    RobotCallOutput,
    RobotCallRequestBody,
    RobotCallResponse,
    RobotStatusUpdateBody,
)
from rest_api.services.domain import RobotCallService
from shared.config.logging import robot_logger as logger
from shared.infrastructure.db import get_db
from shared.infrastructure.events import channel_robot_calls, get_redis_pool

router = APIRouter(prefix="/robot-call", tags=["robot-call"])

# Client messages larger than this close the socket
MAX_CLIENT_MESSAGE = 1024


def get_robot_call_service(db: Session = Depends(get_db)) -> RobotCallService:
    return RobotCallService(db)


@router.post("/call", response_model=RobotCallResponse)
async def call_robot(
    body: RobotCallRequestBody,
    service: RobotCallService = Depends(get_robot_call_service),
) -> RobotCallResponse:
    """
    Store the request and ask the robot server to dispatch. A failed
    dispatch still returns 200 with success=false and status "failed".
    """
    dispatched, message, call = await service.call_robot(body.table_no, body.restaurant_id)
    return RobotCallResponse(success=dispatched, message=message, request=call)


@router.get("/status/{table_no}", response_model=RobotCallOutput)
def get_call_status(
    table_no: int,
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    service: RobotCallService = Depends(get_robot_call_service),
) -> RobotCallOutput:
    return service.latest_for_table(table_no, restaurant_id)


@router.get("/pending", response_model=list[RobotCallOutput])
def list_pending_calls(
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    service: RobotCallService = Depends(get_robot_call_service),
) -> list[RobotCallOutput]:
    return service.pending(restaurant_id)


@router.post("/status/update", response_model=RobotCallOutput)
async def update_call_status(
    body: RobotStatusUpdateBody,
    service: RobotCallService = Depends(get_robot_call_service),
) -> RobotCallOutput:
    return await service.update_status(
        body.status,
        request_id=body.request_id,
        table_no=body.table_no,
        restaurant_id=body.restaurant_id,
    )


# =============================================================================
# WebSocket relay
# =============================================================================


async def _relay(websocket: WebSocket, channel: str) -> None:
    redis_pool = await get_redis_pool()
    pubsub = redis_pool.pubsub()
    await pubsub.subscribe(channel)
    try:
        async for msg in pubsub.listen():
            if msg is None or msg.get("type") != "message":
                continue
            await websocket.send_text(msg["data"])
    finally:
        await pubsub.unsubscribe(channel)
        await pubsub.aclose()


async def _receive(websocket: WebSocket) -> None:
    """Answer heartbeats until the client goes away."""
    while True:
        data = await websocket.receive_text()
        if len(data) > MAX_CLIENT_MESSAGE:
            await websocket.close(code=1009, reason="Message too large")
            return
        if data == "ping":
            await websocket.send_text("pong")


@router.websocket("/ws/robot-calls")
async def robot_calls_websocket(
    websocket: WebSocket,
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
) -> None:
    """
    Push robot-call events as JSON text frames. "ping" is answered with
    "pong". Pass restaurantId to receive only that restaurant's events.
    """
    try:
        channel = channel_robot_calls(restaurant_id)
    except ValueError as e:
        await websocket.close(code=4000, reason=str(e))
        return

    await websocket.accept()
    logger.info("Robot call listener connected", channel=channel)

    relay = asyncio.create_task(_relay(websocket, channel))
    receive = asyncio.create_task(_receive(websocket))
    try:
        done, _ = await asyncio.wait({relay, receive}, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            exc = task.exception()
            if exc is not None and not isinstance(exc, WebSocketDisconnect):
                raise exc
    except (redis.RedisError, OSError) as e:
        logger.warning("Robot call relay stopped", channel=channel, error=str(e))
        with contextlib.suppress(RuntimeError):
            await websocket.close(code=1011, reason="Event stream unavailable")
    finally:
        for task in (relay, receive):
            task.cancel()
        await asyncio.gather(relay, receive, return_exceptions=True)
        logger.info("Robot call listener disconnected", channel=channel)
