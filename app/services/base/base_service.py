"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from datetime import date, datetime
from typing import Callable, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InfrastructureError
from app.core.logging import get_logger
from app.core.utils import DateTimeUtils

Clock = Callable[[], datetime]


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Transaction management with all-or-nothing semantics
    - Injectable clock so time-dependent rules are testable
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        """
        Initialize base service.

        Args:
            db_session: SQLAlchemy database session
            clock: Callable returning the current naive UTC datetime
        """
        self.db: Session = db_session
        self._clock: Clock = clock or DateTimeUtils.now_utc
        self._logger = get_logger(self.__class__.__name__)

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self._clock().date()

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self, auto_commit: bool = True) -> Iterator[Session]:
        """
        Context manager for database transactions with automatic rollback.

        Args:
            auto_commit: Whether to commit automatically on success

        Yields:
            The database session

        Example:
            with self.transaction():
                self.reservations.insert_if_free(...)
                # automatic commit on success, rollback on exception
        """
        try:
            yield self.db
            if auto_commit:
                self._commit()
        except Exception:
            self._rollback()
            raise

    def _commit(self) -> None:
        """Commit the current transaction with error handling."""
        try:
            self.db.commit()
            self._logger.debug("Transaction committed successfully")
        except SQLAlchemyError as e:
            self._logger.error(f"Commit failed: {e}", exc_info=True)
            raise InfrastructureError("Commit failed", operation="commit") from e

    def _rollback(self) -> None:
        """Rollback the current transaction, logging rollback errors."""
        try:
            self.db.rollback()
            self._logger.debug("Transaction rolled back")
        except SQLAlchemyError as e:
            # Rollback errors must not mask the original error
            self._logger.warning(f"Rollback failed: {e}")
