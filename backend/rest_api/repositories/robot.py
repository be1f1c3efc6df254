"""
Robot and robot-call repositories.
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, InstrumentedAttribute

from rest_api.models import Robot, RobotCallRequest
from shared.config.constants import IdPrefix, RobotCallStatus
from .base import BaseRepository


class RobotRepository(BaseRepository[Robot]):
    id_prefix = IdPrefix.ROBOT

    @property
    def model(self) -> type[Robot]:
        return Robot

    @property
    def id_column(self) -> InstrumentedAttribute:
        return Robot.robot_id


class RobotCallRepository(BaseRepository[RobotCallRequest]):
    @property
    def model(self) -> type[RobotCallRequest]:
        return RobotCallRequest

    @property
    def id_column(self) -> InstrumentedAttribute:
        return RobotCallRequest.id

    def find_latest_for_table(
        self, table_no: int, restaurant_id: str | None = None
    ) -> RobotCallRequest | None:
        query = self._scoped(
            select(RobotCallRequest).where(RobotCallRequest.table_no == table_no),
            restaurant_id,
        ).order_by(RobotCallRequest.created_at.desc(), RobotCallRequest.id.desc())
        return self._db.scalar(query.limit(1))

    def find_pending(self, restaurant_id: str | None = None) -> Sequence[RobotCallRequest]:
        """Pending calls, oldest first."""
        query = self._scoped(
            select(RobotCallRequest).where(RobotCallRequest.status == RobotCallStatus.PENDING.value),
            restaurant_id,
        ).order_by(RobotCallRequest.created_at, RobotCallRequest.id)
        return self._db.execute(query).scalars().all()


def get_robot_repository(db: Session) -> RobotRepository:
    return RobotRepository(db)


def get_robot_call_repository(db: Session) -> RobotCallRepository:
    return RobotCallRepository(db)
