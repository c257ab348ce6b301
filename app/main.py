from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.router import router as api_v1_router
from app.core.config import settings
from app.core.exceptions import BaseAppException
from app.core.logging import get_logger, setup_logging
from app.core.middleware import get_request_id, register_middlewares
from app.db.init_db import init_db

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging()
    # For production, manage the schema with migrations
    if not settings.is_production:
        init_db()
    yield


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    """Render domain errors as {"error": {...}} with their status code."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        exc.message,
        extra={
            "error_code": exc.error_code.value,
            "status_code": exc.status_code,
            "path": request.url.path,
            "request_id": get_request_id(request),
        },
    )
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register shared core middlewares (request ID, timing)
    register_middlewares(app)

    app.add_exception_handler(BaseAppException, app_exception_handler)

    # Mount API v1 under /api/v1
    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.get("/health", tags=["Health"])
    def health() -> dict:
        return {"status": "ok", "version": settings.API_VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.is_development)
