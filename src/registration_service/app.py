from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from registration_service.api.middleware.correlation_id import CorrelationIdMiddleware
from registration_service.api.middleware.errors import INTERNAL_ERROR, UnhandledErrorMiddleware
from registration_service.api.middleware.metrics import RequestTimingMiddleware
from registration_service.api.v1.routers import health, participants
from registration_service.application.exceptions import (
    ConflictError,
    InvalidFieldsError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from registration_service.config import Settings, settings as default_settings
from registration_service.context import AppContext
from registration_service.infrastructure.db.base import Base
from registration_service.infrastructure.db import models  # noqa: F401
from registration_service.infrastructure.storage.local import PUBLIC_PREFIX

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    context: AppContext = app.state.context
    if context.settings.DB_CREATE_SCHEMA:
        async with context.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")
    logger.info("Serving avatars from %s", context.storage.root)

    yield

    await context.aclose()
    logger.info("Database engine disposed")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    context = AppContext.from_settings(settings)

    app = FastAPI(
        title="Registration API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(participants.router)
    app.mount(
        PUBLIC_PREFIX,
        StaticFiles(directory=context.storage.root),
        name="uploads",
    )

    return app


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": detail})


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError) -> JSONResponse:
        return _error(404, exc.detail)

    @app.exception_handler(ConflictError)
    async def _conflict(_req: Request, exc: ConflictError) -> JSONResponse:
        return _error(409, exc.detail)

    @app.exception_handler(ValidationError)
    async def _validation(req: Request, exc: ValidationError) -> JSONResponse:
        logger.info("Rejected %s: %s", req.url.path, type(exc).__name__)
        if isinstance(exc, InvalidFieldsError):
            return JSONResponse(
                status_code=400,
                content={"error": exc.detail, "detalles": exc.fields},
            )
        return _error(400, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(_req: Request, exc: RequestValidationError) -> JSONResponse:
        fields: dict[str, list[str]] = {}
        for error in exc.errors():
            key = str(error["loc"][-1]) if error["loc"] else "__root__"
            fields.setdefault(key, []).append(error["msg"])
        return JSONResponse(
            status_code=400,
            content={"error": InvalidFieldsError.default_detail, "detalles": fields},
        )

    @app.exception_handler(PersistenceError)
    async def _persistence(req: Request, exc: PersistenceError) -> JSONResponse:
        logger.error(
            "Persistence failure on %s: %s",
            req.url.path,
            exc.detail,
            exc_info=exc,
        )
        return _error(500, INTERNAL_ERROR)
