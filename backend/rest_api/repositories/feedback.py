"""
Feedback Repository.
"""

from sqlalchemy.orm import Session, InstrumentedAttribute

from rest_api.models import Feedback
from shared.config.constants import IdPrefix
from shared.utils.identifiers import format_id
from .base import BaseRepository


class FeedbackRepository(BaseRepository[Feedback]):
    id_prefix = IdPrefix.FEEDBACK

    @property
    def model(self) -> type[Feedback]:
        return Feedback

    @property
    def id_column(self) -> InstrumentedAttribute:
        return Feedback.feedback_id

    def allocate_id(self, restaurant_id: str | None = None) -> str:
        """
        Fb-{count + 1} within the restaurant, stepping past ids that are
        still taken after earlier deletes.
        """
        number = self.count(restaurant_id) + 1
        while self.exists(format_id(self.id_prefix, number), restaurant_id):
            number += 1
        return format_id(self.id_prefix, number)


def get_feedback_repository(db: Session) -> FeedbackRepository:
    return FeedbackRepository(db)
