"""
App user repositories: accounts, preferences, statistics.
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session, InstrumentedAttribute

from rest_api.models import AppUser, UserPreferences, UserStats
from .base import BaseRepository


class AppUserRepository(BaseRepository[AppUser]):
    @property
    def model(self) -> type[AppUser]:
        return AppUser

    @property
    def id_column(self) -> InstrumentedAttribute:
        return AppUser.user_id

    def _base_query(self, restaurant_id: str | None) -> Select:
        return select(AppUser).order_by(AppUser.created_at.desc())

    def find_by_email(self, email: str) -> AppUser | None:
        return self._db.scalar(
            select(AppUser).where(func.lower(AppUser.email) == email.strip().lower()).limit(1)
        )

    def names_for(self, user_ids: list[str]) -> dict[str, str]:
        if not user_ids:
            return {}
        rows = self._db.execute(
            select(AppUser.user_id, AppUser.name).where(AppUser.user_id.in_(user_ids))
        ).all()
        return {user_id: name for user_id, name in rows}


class UserPreferencesRepository(BaseRepository[UserPreferences]):
    @property
    def model(self) -> type[UserPreferences]:
        return UserPreferences

    @property
    def id_column(self) -> InstrumentedAttribute:
        return UserPreferences.user_id


class UserStatsRepository(BaseRepository[UserStats]):
    @property
    def model(self) -> type[UserStats]:
        return UserStats

    @property
    def id_column(self) -> InstrumentedAttribute:
        return UserStats.user_id

    def find_active_between(self, user_id: str, start: datetime, end: datetime) -> UserStats | None:
        return self._db.scalar(
            select(UserStats).where(
                UserStats.user_id == user_id,
                UserStats.last_activity >= start,
                UserStats.last_activity <= end,
            )
        )

    def leaderboard(self, category: str, limit: int) -> Sequence[UserStats]:
        column = getattr(UserStats, category)
        query = (
            select(UserStats)
            .where(column > 0)
            .order_by(column.desc(), UserStats.last_activity.desc())
            .limit(limit)
        )
        return self._db.execute(query).scalars().all()

    def all_stats(self) -> Sequence[UserStats]:
        return self._db.execute(select(UserStats)).scalars().all()


def get_app_user_repository(db: Session) -> AppUserRepository:
    return AppUserRepository(db)


def get_user_preferences_repository(db: Session) -> UserPreferencesRepository:
    return UserPreferencesRepository(db)


def get_user_stats_repository(db: Session) -> UserStatsRepository:
    return UserStatsRepository(db)
