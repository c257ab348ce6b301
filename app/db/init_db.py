# app/db/init_db.py
"""Database initialization utilities."""
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from app.core.logging import get_logger
from app.db.base import Base
from app.db.session import engine as default_engine

logger = get_logger(__name__)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Initialize the database by creating all tables.

    Note: This is suitable for development/testing only.
    For production, manage the schema with migrations instead.
    """
    bind = bind or default_engine
    existing_tables = inspect(bind).get_table_names()
    Base.metadata.create_all(bind=bind)
    logger.info(
        "Database schema ensured",
        extra={"existing_tables": len(existing_tables)},
    )
