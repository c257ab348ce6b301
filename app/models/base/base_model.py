"""
Base model configuration for SQLAlchemy ORM.

Provides abstract base classes with common functionality
for all database models including declarative base setup,
UUID keys, timestamps and soft deletion.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, String, event
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from app.core.utils import DateTimeUtils

# Create declarative base
Base = declarative_base()


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.

    Provides foundation for all database models with
    standard functionality and utilities.
    """

    __abstract__ = True

    # Primary key column - present in all models
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        nullable=False,
        comment="Primary key (UUID)"
    )

    def __repr__(self) -> str:
        """String representation of model instance."""
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


class TimestampModel(BaseModel):
    """
    Base model with automatic timestamp tracking.

    Includes created_at and updated_at fields with
    automatic management (naive UTC).
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=DateTimeUtils.now_utc,
        comment="Record creation timestamp"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=DateTimeUtils.now_utc,
        comment="Record last update timestamp"
    )


class SoftDeleteModel(TimestampModel):
    """
    Base model with soft delete capability.

    Includes is_deleted flag and deleted_at timestamp
    for logical deletion. Repositories filter on ``is_deleted``
    explicitly; there is no implicit query hook.
    """

    __abstract__ = True

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
        comment="Soft delete flag"
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True,
        comment="Deletion timestamp"
    )

    def soft_delete(self) -> "SoftDeleteModel":
        """Mark the instance deleted without removing the row."""
        self.is_deleted = True
        self.deleted_at = DateTimeUtils.now_utc()
        return self


# Event listeners for automatic timestamp management
@event.listens_for(TimestampModel, 'before_update', propagate=True)
def receive_before_update(mapper, connection, target):
    """Update timestamp before update."""
    target.updated_at = DateTimeUtils.now_utc()
