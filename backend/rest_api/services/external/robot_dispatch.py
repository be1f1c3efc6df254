"""
Robot dispatch server client.

POST {ROBOT_SERVER_URL}/api/robot/dispatch with a bearer key. Failures are
reported in the result instead of raised: a robot call that cannot be
delivered is still recorded, with status "failed".
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import httpx

from shared.config.settings import settings
from shared.config.logging import robot_logger as logger
from .http_client import PooledHttpClient


@dataclass
class DispatchResult:
    success: bool
    status_code: int
    data: Any = None
    error: str | None = None
    sent_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class RobotDispatchClient(PooledHttpClient):
    """HTTP client for the robot control server."""

    def __init__(self, base_url: str | None = None, api_key: str | None = None):
        super().__init__(
            base_url=base_url or settings.robot_server_url,
            timeout=settings.robot_dispatch_timeout,
            max_connections=5,
        )
        self._api_key = api_key if api_key is not None else settings.robot_api_key

    async def dispatch(self, table_no: int, priority: str = "normal") -> DispatchResult:
        """Ask the robot server to send a robot to the table."""
        payload = {
            "tableNo": table_no,
            "action": "dispatch",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "priority": priority,
        }
        endpoint = f"{self.base_url}/api/robot/dispatch"
        logger.info("Sending robot dispatch", endpoint=endpoint, table_no=table_no)

        try:
            client = await self._get_client()
            response = await client.post(
                endpoint,
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Robot server rejected dispatch",
                table_no=table_no,
                status_code=e.response.status_code,
            )
            return DispatchResult(False, e.response.status_code, error=e.response.text[:500])
        except httpx.HTTPError as e:
            logger.warning("Robot server unreachable", table_no=table_no, error=str(e))
            return DispatchResult(False, 503, error=str(e) or type(e).__name__)

        try:
            data = response.json()
        except ValueError:
            data = response.text
        return DispatchResult(True, response.status_code, data=data)


robot_dispatch_client = RobotDispatchClient()


async def close_robot_dispatch_client() -> None:
    await robot_dispatch_client.close()
