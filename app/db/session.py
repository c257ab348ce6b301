"""Database session management."""
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def build_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create a SQLAlchemy engine for the configured store.

    SQLite in-memory databases share one connection so every session sees
    the same data; PostgreSQL connections get a statement timeout so no
    call blocks indefinitely.
    """
    url = database_url or settings.database.DATABASE_URL
    echo = settings.database.DB_ECHO if echo is None else echo

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=settings.database.DB_POOL_SIZE,
        max_overflow=settings.database.DB_MAX_OVERFLOW,
        pool_timeout=settings.database.DB_POOL_TIMEOUT,
        pool_recycle=settings.database.DB_POOL_RECYCLE,
        connect_args={
            "options": f"-c statement_timeout={settings.database.DB_STATEMENT_TIMEOUT_MS}"
        },
    )


engine = build_engine()

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
