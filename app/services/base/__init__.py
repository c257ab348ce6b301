"""
Base service infrastructure.
"""

from app.services.base.base_service import BaseService, Clock

__all__ = ["BaseService", "Clock"]
