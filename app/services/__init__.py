# app/services/__init__.py
"""
Service layer root package.

Each subpackage implements application use-cases on top of:

- SQLAlchemy models (app.models.*)
- Repositories (app.repositories.*)
- Pydantic schemas (app.schemas.*)

Typical pattern for a service:

    class SomeService(BaseService):
        def __init__(self, db_session: Session, clock: Optional[Clock] = None):
            super().__init__(db_session, clock)
            self.rooms = RoomRepository(db_session)

        def some_use_case(...):
            with self.transaction():
                ...
"""

from app.services.base import BaseService, Clock

__all__ = [
    "BaseService",
    "Clock",
]
