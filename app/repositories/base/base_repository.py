"""
Base repository with standardized CRUD operations and error translation.

Repositories never commit: the calling service owns the transaction so
that check-and-write sequences stay atomic. Driver failures are
translated into domain errors at this boundary.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, InfrastructureError, NotFoundError
from app.core.logging import get_logger
from app.models.base import BaseModel, SoftDeleteModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository for a single aggregate.

    Soft-deleted rows are excluded by an explicit predicate on every
    read unless ``include_deleted`` is passed.
    """

    not_found_error = NotFoundError

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db
        self._is_soft_delete = issubclass(model, SoftDeleteModel)

    # ==================== Error Translation ====================

    @contextmanager
    def translate_errors(self, operation: str) -> Iterator[None]:
        """
        Translate driver exceptions into domain errors.

        Args:
            operation: Short operation name used in logs and error details
        """
        try:
            yield
        except IntegrityError as e:
            logger.warning(
                "Integrity violation during %s on %s",
                operation,
                self.model.__name__,
                extra={"operation": operation, "error": str(e.orig)},
            )
            raise ConflictError(
                f"{self.model.__name__} violates a uniqueness or integrity rule",
                details={"operation": operation},
            ) from e
        except OperationalError as e:
            logger.error(
                "Store unavailable during %s on %s",
                operation,
                self.model.__name__,
                extra={"operation": operation},
            )
            raise InfrastructureError(
                "Storage is unavailable or timed out",
                operation=operation,
            ) from e
        except SQLAlchemyError as e:
            logger.error(
                "Storage failure during %s on %s: %s",
                operation,
                self.model.__name__,
                e,
                extra={"operation": operation},
            )
            raise InfrastructureError(
                f"{operation} failed",
                operation=operation,
            ) from e

    def _not_deleted(self, stmt, include_deleted: bool = False):
        if self._is_soft_delete and not include_deleted:
            stmt = stmt.where(self.model.is_deleted.is_(False))
        return stmt

    # ==================== Create Operations ====================

    def add(self, entity: ModelType) -> ModelType:
        """
        Stage a new entity and flush it so generated values are available.

        Args:
            entity: Entity to persist

        Returns:
            Persisted entity
        """
        with self.translate_errors("create"):
            self.db.add(entity)
            self.db.flush()
        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    def create(self, **values: Any) -> ModelType:
        """Build an entity from keyword values and persist it."""
        return self.add(self.model(**values))

    # ==================== Read Operations ====================

    def find_by_id(
        self,
        id: str,
        include_deleted: bool = False,
        for_update: bool = False,
    ) -> Optional[ModelType]:
        """
        Find entity by ID.

        Args:
            id: Entity ID
            include_deleted: Include soft-deleted entities
            for_update: Lock the row until the transaction ends

        Returns:
            Entity or None
        """
        stmt = self._not_deleted(select(self.model).where(self.model.id == id), include_deleted)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        with self.translate_errors("find_by_id"):
            return self.db.execute(stmt).scalars().first()

    def get_by_id(
        self,
        id: str,
        include_deleted: bool = False,
        for_update: bool = False,
    ) -> ModelType:
        """
        Get entity by ID or raise the repository's not-found error.

        Raises:
            NotFoundError: If entity not found
        """
        entity = self.find_by_id(id, include_deleted=include_deleted, for_update=for_update)
        if entity is None:
            if self.not_found_error is NotFoundError:
                raise NotFoundError(self.model.__name__, id)
            raise self.not_found_error(id)
        return entity

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[List[str]] = None,
        include_deleted: bool = False,
    ) -> List[ModelType]:
        """
        Find entities matching criteria.

        Args:
            criteria: Filter criteria as key-value pairs
            order_by: List of fields to order by (prefix with - for desc)
            include_deleted: Include soft-deleted entities

        Returns:
            List of matching entities
        """
        stmt = select(self.model)
        for key, value in criteria.items():
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set)):
                stmt = stmt.where(column.in_(value))
            else:
                stmt = stmt.where(column == value)
        stmt = self._not_deleted(stmt, include_deleted)

        for field in order_by or []:
            if field.startswith('-'):
                stmt = stmt.order_by(getattr(self.model, field[1:]).desc())
            else:
                stmt = stmt.order_by(getattr(self.model, field))

        with self.translate_errors("find_by_criteria"):
            return list(self.db.execute(stmt).scalars().all())

    # ==================== Flush ====================

    def flush(self, operation: str = "flush") -> None:
        with self.translate_errors(operation):
            self.db.flush()

    # ==================== Delete Operations ====================

    def soft_delete(self, entity: ModelType) -> ModelType:
        """
        Soft delete an entity.

        Raises:
            TypeError: If the model does not support soft deletion
        """
        if not self._is_soft_delete:
            raise TypeError(f"{self.model.__name__} does not support soft delete")
        entity.soft_delete()
        self.flush("soft_delete")
        logger.info(f"Soft deleted {self.model.__name__} with id: {entity.id}")
        return entity
