# app/api/v1/__init__.py
"""
API v1 package.

The router composition lives in `app.api.v1.router`.
"""

from .router import router as api_router

__all__ = ["api_router"]
