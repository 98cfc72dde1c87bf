"""
jobly.api.app

FastAPI app factory for the Jobly API.

Responsibilities:
- Build the FastAPI application and register routers, middleware and
  exception handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from jobly import __version__
from jobly.api.errors import install_exception_handlers
from jobly.api.routers.auth import router as auth_router
from jobly.api.routers.companies import router as companies_router
from jobly.api.routers.health import router as health_router
from jobly.api.routers.jobs import router as jobs_router
from jobly.api.routers.users import router as users_router
from jobly.auth.jwt import jwt_config_from_settings
from jobly.auth.middleware import AuthenticationMiddleware
from jobly.auth.passwords import build_crypt_context
from jobly.db.init_db import init_db
from jobly.db.session import create_engine, create_sessionmaker
from jobly.observability.logging import configure_logging, get_logger
from jobly.observability.middleware import RequestContextMiddleware
from jobly.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    jwt_config = jwt_config_from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schema changes go through Alembic.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Jobly API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.jwt_config = jwt_config
    app.state.pwd_context = build_crypt_context(rounds=settings.bcrypt_work_factor)

    # Last added runs first: request context wraps authentication.
    app.add_middleware(AuthenticationMiddleware, jwt_config=jwt_config)
    app.add_middleware(RequestContextMiddleware)
    install_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(companies_router)
    app.include_router(jobs_router)
    app.include_router(users_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Routers call repositories directly; there is no service layer between them.
# Access checks are declared per route through `jobly.auth.deps`.
