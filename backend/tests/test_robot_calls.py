"""
Tests for table-side robot calls.

Tests cover:
- A call is stored, dispatched and announced on the event sink
- A failed dispatch is recorded as "failed" and still answers 200
- Status updates by request id or by table number
- Redis publishing to the global and restaurant channels
- The robot server client's error reporting
"""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import redis.asyncio as redis

from rest_api.services.domain.robot_call_service import publish_to_redis
from rest_api.services.external import RobotDispatchClient
from shared.infrastructure.events import (
    ROBOT_CALLED,
    ROBOT_STATUS_UPDATED,
    channel_robot_calls,
    publish_robot_call_event,
)


class TestRobotCallFlow:
    def test_call_is_dispatched_and_announced(self, client, dispatcher, event_sink):
        response = client.post("/robot-call/call", json={"tableNo": 4, "restaurantId": "restro-1"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Robot called to table 4 successfully"
        assert body["request"]["tableNo"] == 4
        assert body["request"]["status"] == "dispatched"
        assert body["request"]["restaurantId"] == "restro-1"

        assert dispatcher.calls == [4]
        event_type, payload, restaurant_id = event_sink.events[0]
        assert event_type == ROBOT_CALLED
        assert payload["tableNo"] == 4
        assert restaurant_id == "restro-1"

    def test_failed_dispatch_is_recorded(self, client, dispatcher):
        dispatcher.success = False

        response = client.post("/robot-call/call", json={"tableNo": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["request"]["status"] == "failed"
        assert client.get("/robot-call/status/2").json()["status"] == "failed"

    def test_missing_table_is_400(self, client, dispatcher):
        response = client.post("/robot-call/call", json={})
        assert response.status_code == 400
        assert dispatcher.calls == []

    def test_status_of_unknown_table_is_404(self, client):
        assert client.get("/robot-call/status/9").status_code == 404


class TestRobotCallStatus:
    def test_update_by_request_id(self, client, event_sink):
        request_id = client.post("/robot-call/call", json={"tableNo": 1}).json()["request"]["id"]

        response = client.post("/robot-call/status/update", json={"requestId": request_id, "status": "completed"})

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert event_sink.events[-1][0] == ROBOT_STATUS_UPDATED

    def test_update_latest_call_of_table(self, client):
        client.post("/robot-call/call", json={"tableNo": 3})
        latest = client.post("/robot-call/call", json={"tableNo": 3}).json()["request"]["id"]

        response = client.post("/robot-call/status/update", json={"tableNo": 3, "status": "completed"})

        assert response.json()["id"] == latest

    def test_unknown_status_is_400(self, client):
        client.post("/robot-call/call", json={"tableNo": 1})
        response = client.post("/robot-call/status/update", json={"tableNo": 1, "status": "teleported"})
        assert response.status_code == 400

    def test_missing_target_is_400(self, client):
        response = client.post("/robot-call/status/update", json={"status": "completed"})
        assert response.status_code == 400

    def test_pending_lists_only_pending_calls(self, client):
        call_id = client.post("/robot-call/call", json={"tableNo": 5}).json()["request"]["id"]
        client.post("/robot-call/status/update", json={"requestId": call_id, "status": "pending"})
        client.post("/robot-call/call", json={"tableNo": 6})

        pending = client.get("/robot-call/pending").json()

        assert [c["tableNo"] for c in pending] == [5]


class TestRobotCallEvents:
    CALL = {"id": 1, "tableNo": 4, "status": "dispatched"}

    @pytest.mark.asyncio
    async def test_scoped_event_goes_to_both_channels(self):
        redis_client = AsyncMock()
        redis_client.publish.return_value = 1

        delivered = await publish_robot_call_event(redis_client, ROBOT_CALLED, self.CALL, "restro-1")

        assert delivered == 2
        channels = [c.args[0] for c in redis_client.publish.await_args_list]
        assert channels == ["robot_calls", "restaurant:restro-1:robot_calls"]
        event = json.loads(redis_client.publish.await_args_list[0].args[1])
        assert event["type"] == "robot-called"
        assert event["entity"] == self.CALL

    @pytest.mark.asyncio
    async def test_unknown_event_type_is_rejected(self):
        with pytest.raises(ValueError):
            await publish_robot_call_event(AsyncMock(), "robot-exploded", self.CALL)

    def test_restaurant_channel_rejects_separator(self):
        assert channel_robot_calls() == "robot_calls"
        with pytest.raises(ValueError):
            channel_robot_calls("restro:1")

    @pytest.mark.asyncio
    async def test_redis_outage_does_not_raise(self):
        failing = AsyncMock()
        failing.publish.side_effect = redis.ConnectionError("down")

        with patch(
            "rest_api.services.domain.robot_call_service.get_redis_client",
            AsyncMock(return_value=failing),
        ), patch("shared.infrastructure.events.publisher.settings.redis_publish_retry_delay", 0):
            await publish_to_redis(ROBOT_CALLED, self.CALL, None)

        assert failing.publish.await_count >= 1


class TestRobotDispatchClient:
    def _client(self, handler) -> RobotDispatchClient:
        dispatch_client = RobotDispatchClient(base_url="http://robots.test", api_key="key-1")
        dispatch_client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return dispatch_client

    @pytest.mark.asyncio
    async def test_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"robot": "R2"})

        result = await self._client(handler).dispatch(7)

        assert result.success is True
        assert result.data == {"robot": "R2"}
        assert seen["url"] == "http://robots.test/api/robot/dispatch"
        assert seen["auth"] == "Bearer key-1"
        assert seen["body"]["tableNo"] == 7
        assert seen["body"]["action"] == "dispatch"

    @pytest.mark.asyncio
    async def test_rejected_dispatch_is_reported(self):
        result = await self._client(lambda request: httpx.Response(409, text="busy")).dispatch(7)

        assert result.success is False
        assert result.status_code == 409
        assert result.error == "busy"

    @pytest.mark.asyncio
    async def test_unreachable_server_is_reported(self):
        def handler(request):
            raise httpx.ConnectError("refused")

        result = await self._client(handler).dispatch(7)

        assert result.success is False
        assert result.status_code == 503
