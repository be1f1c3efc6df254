"""
Base Repository implementation.
Provides common data access patterns with restaurant (tenant) scoping.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TypeVar, Generic, Any, Sequence
from sqlalchemy.orm import Session, InstrumentedAttribute
from sqlalchemy import Select, select, func

from shared.config.constants import Limits
from shared.utils.identifiers import next_id


ModelT = TypeVar("ModelT")


@dataclass
class RepositoryFilters:
    """Base filters for repository queries."""

    # Pagination
    limit: int = Limits.DEFAULT_PAGE_SIZE
    offset: int = 0

    def __post_init__(self):
        """Validate and normalize filters."""
        self.limit = min(max(1, self.limit), Limits.MAX_PAGE_SIZE)
        self.offset = max(0, self.offset)


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: the SQLAlchemy model class
    - id_column: the mapped attribute holding the entity id

    Models with a restaurant_id attribute are scoped by it whenever a
    restaurant id is passed.
    """

    # "PREFIX" of PREFIX-N ids allocated by allocate_id()
    id_prefix: str | None = None

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    @property
    @abstractmethod
    def id_column(self) -> InstrumentedAttribute:
        """Return the id attribute (e.g. Dish.dish_id)."""
        ...

    def _scoped(self, query: Select, restaurant_id: str | None) -> Select:
        if restaurant_id is not None and hasattr(self.model, "restaurant_id"):
            query = query.where(self.model.restaurant_id == restaurant_id)
        return query

    def _base_query(self, restaurant_id: str | None) -> Select:
        """Base query ordered by id; subclasses may add ordering or joins."""
        return self._scoped(select(self.model), restaurant_id).order_by(self.id_column)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply entity-specific filters to query."""
        return query

    def find_all(
        self,
        restaurant_id: str | None = None,
        filters: RepositoryFilters | None = None,
    ) -> Sequence[ModelT]:
        """
        Find entities matching filters.

        Args:
            restaurant_id: Restaurant scope (None = all restaurants)
            filters: Filters and page window. Without filters every row is
                returned, unpaged.
        """
        query = self._base_query(restaurant_id)
        if filters is None:
            return self._db.execute(query).scalars().all()
        query = self._apply_filters(query, filters)
        query = query.offset(filters.offset).limit(filters.limit)
        return self._db.execute(query).scalars().all()

    def find_by_id(self, entity_id: Any, restaurant_id: str | None = None) -> ModelT | None:
        query = self._scoped(select(self.model).where(self.id_column == entity_id), restaurant_id)
        return self._db.scalar(query)

    def find_by(self, restaurant_id: str | None = None, **criteria: Any) -> Sequence[ModelT]:
        """
        Find entities whose attributes equal the given values.

        Usage:
            repo.find_by("restro-1", customer_id="CUSTOMER-3")
        """
        query = self._base_query(restaurant_id)
        for attribute, value in criteria.items():
            query = query.where(getattr(self.model, attribute) == value)
        return self._db.execute(query).scalars().all()

    def count(self, restaurant_id: str | None = None) -> int:
        query = self._scoped(select(func.count()).select_from(self.model), restaurant_id)
        return self._db.scalar(query) or 0

    def exists(self, entity_id: Any, restaurant_id: str | None = None) -> bool:
        query = self._scoped(
            select(func.count()).select_from(self.model).where(self.id_column == entity_id),
            restaurant_id,
        )
        return (self._db.scalar(query) or 0) > 0

    def allocate_id(self, restaurant_id: str | None = None) -> str:
        """
        Next PREFIX-N id: one past the highest numeric suffix stored.

        Reads and the later insert are not atomic; a concurrent duplicate is
        rejected by the primary key at flush time.
        """
        if not self.id_prefix:
            raise NotImplementedError(f"{type(self).__name__} has no id prefix")
        query = self._scoped(
            select(self.id_column).where(self.id_column.like(f"{self.id_prefix}-%")),
            restaurant_id,
        )
        return next_id(self.id_prefix, self._db.execute(query).scalars())

    def save(self, entity: ModelT) -> ModelT:
        """
        Save entity (insert or update) and flush.

        The caller owns the transaction and commits with safe_commit().
        """
        self._db.add(entity)
        self._db.flush()
        self._db.refresh(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        """Hard delete entity."""
        self._db.delete(entity)
        self._db.flush()
