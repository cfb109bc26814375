"""
learnhub.api.app

FastAPI app factory for the LearnHub services.

Responsibilities:
- Build the FastAPI application for one service shape (identity, courses,
  enrollments) or all of them in one process.
- Initialize and dispose shared infrastructure (DB engine, unit of work).
- Provide a single composition root where settings and the verifier config are
  built once and handed to request paths through app.state.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI

from learnhub import __version__
from learnhub.api.errors import install_error_handlers
from learnhub.api.routers.courses import router as courses_router
from learnhub.api.routers.enrollments import router as enrollments_router
from learnhub.api.routers.health import router as health_router
from learnhub.api.routers.identity import router as identity_router
from learnhub.auth.deps import jwt_config_from_settings
from learnhub.db.init_db import init_db
from learnhub.db.session import create_engine, create_sessionmaker
from learnhub.db.unit_of_work import UnitOfWork
from learnhub.observability.logging import configure_logging, get_logger
from learnhub.observability.middleware import RequestContextMiddleware
from learnhub.settings import ServiceName, Settings

log = get_logger(__name__)

SERVICE_ROUTERS: dict[ServiceName, tuple[APIRouter, ...]] = {
    "identity": (identity_router,),
    "courses": (courses_router,),
    "enrollments": (enrollments_router,),
    "all": (identity_router, courses_router, enrollments_router),
}


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_title, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, service=settings.service)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        app.state.unit_of_work = UnitOfWork(
            app.state.sessionmaker,
            attempts=settings.db_retry_attempts,
            backoff_seconds=settings.db_retry_backoff_seconds,
        )
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod uses Alembic migrations.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title=f"LearnHub {settings.service} service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.jwt_config = jwt_config_from_settings(settings)

    install_error_handlers(app)
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    for router in SERVICE_ROUTERS[settings.service]:
        app.include_router(router)

    return app


# --- Module Notes -----------------------------------------------------------
# Every service shape carries the verifier (via `auth.deps.get_identity`) and the
# policy engine; none of them talks to another service at request time.
