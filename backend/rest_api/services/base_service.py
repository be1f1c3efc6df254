"""
Base Service Classes.

Router (thin) -> Service (business logic) -> Repository (data access) -> Model

Usage:
    from rest_api.services.base_service import BaseCRUDService

    class DishService(BaseCRUDService[Dish, DishOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                repo=DishRepository(db),
                output_schema=DishOutput,
                entity_name="Dish",
            )

        def _prepare_create(self, data, restaurant_id):
            data["dish_id"] = self.repo.allocate_id()
            return data
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Generic, Sequence, TypeVar, Type

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.repositories.base import BaseRepository, RepositoryFilters
from shared.infrastructure.db import safe_commit
from shared.config.logging import get_logger
from shared.utils.exceptions import ConflictError, DatabaseError, NotFoundError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseService(ABC, Generic[ModelT]):
    """
    Abstract base service: holds the session and the entity repository.
    """

    def __init__(self, db: Session, repo: BaseRepository[ModelT]):
        self._db = db
        self._repo = repo

    @property
    def db(self) -> Session:
        return self._db

    @property
    def repo(self) -> BaseRepository[ModelT]:
        return self._repo

    def _commit(self, operation: str, **log_context: Any) -> None:
        """
        Commit the unit of work.

        Raises:
            ConflictError: A unique or primary key constraint was violated.
            DatabaseError: Any other database failure.
        """
        try:
            safe_commit(self._db)
        except IntegrityError as e:
            logger.warning(f"Constraint violation during {operation}", error=str(e.orig), **log_context)
            raise ConflictError(f"Conflict during {operation}: record already exists", **log_context)
        except SQLAlchemyError as e:
            logger.error(f"Database failure during {operation}", error=str(e), **log_context)
            raise DatabaseError(operation, **log_context)


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD operations.

    Subclasses customise behaviour through hooks:
    - _validate_create / _validate_update / _validate_delete
    - _prepare_create / _prepare_update (ids, hashing, normalisation)
    - _after_create / _after_update / _after_delete
    """

    def __init__(
        self,
        db: Session,
        repo: BaseRepository[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
    ):
        super().__init__(db, repo)
        self._output_schema = output_schema
        self._entity_name = entity_name

    @property
    def entity_name(self) -> str:
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_entity(self, entity_id: Any, restaurant_id: str | None = None) -> ModelT:
        """
        Raw entity for internal use.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self._repo.find_by_id(entity_id, restaurant_id)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id, restaurant_id=restaurant_id)
        return entity

    def get_by_id(self, entity_id: Any, restaurant_id: str | None = None) -> OutputT:
        return self.to_output(self.get_entity(entity_id, restaurant_id))

    def list_all(
        self,
        restaurant_id: str | None = None,
        filters: RepositoryFilters | None = None,
    ) -> list[OutputT]:
        return [self.to_output(e) for e in self._repo.find_all(restaurant_id, filters)]

    def count(self, restaurant_id: str | None = None) -> int:
        return self._repo.count(restaurant_id)

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any], restaurant_id: str | None = None) -> OutputT:
        """
        Create new entity.

        Raises:
            ValidationError: If data is invalid.
            ConflictError / DatabaseError: If the insert fails.
        """
        self._validate_create(data, restaurant_id)
        data = self._prepare_create(dict(data), restaurant_id)

        entity = self._repo.model(**data)
        self._db.add(entity)
        self._commit(f"create {self._entity_name.lower()}", restaurant_id=restaurant_id)
        self._db.refresh(entity)

        self._after_create(entity)
        return self.to_output(entity)

    def update(self, entity_id: Any, data: dict[str, Any], restaurant_id: str | None = None) -> OutputT:
        """
        Apply the supplied fields; fields not in data are left unchanged.

        Raises:
            NotFoundError: If entity not found.
            ValidationError: If data is invalid.
        """
        entity = self.get_entity(entity_id, restaurant_id)
        self._validate_update(entity, data, restaurant_id)
        data = self._prepare_update(entity, dict(data))

        for field_name, value in data.items():
            if hasattr(entity, field_name):
                setattr(entity, field_name, value)

        self._commit(f"update {self._entity_name.lower()}", entity_id=entity_id)
        self._db.refresh(entity)

        self._after_update(entity)
        return self.to_output(entity)

    def delete(self, entity_id: Any, restaurant_id: str | None = None) -> None:
        """
        Hard delete.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self.get_entity(entity_id, restaurant_id)
        self._validate_delete(entity)
        self._db.delete(entity)
        self._commit(f"delete {self._entity_name.lower()}", entity_id=entity_id)
        self._after_delete(entity_id)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        return self._output_schema.model_validate(entity)

    def to_outputs(self, entities: Sequence[ModelT]) -> list[OutputT]:
        return [self.to_output(e) for e in entities]

    # =========================================================================
    # Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any], restaurant_id: str | None) -> None:
        pass

    def _validate_update(self, entity: ModelT, data: dict[str, Any], restaurant_id: str | None) -> None:
        pass

    def _validate_delete(self, entity: ModelT) -> None:
        pass

    def _prepare_create(self, data: dict[str, Any], restaurant_id: str | None) -> dict[str, Any]:
        if restaurant_id is not None and hasattr(self._repo.model, "restaurant_id"):
            data["restaurant_id"] = restaurant_id
        return data

    def _prepare_update(self, entity: ModelT, data: dict[str, Any]) -> dict[str, Any]:
        return data

    def _after_create(self, entity: ModelT) -> None:
        pass

    def _after_update(self, entity: ModelT) -> None:
        pass

    def _after_delete(self, entity_id: Any) -> None:
        pass
