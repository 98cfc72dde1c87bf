"""
jobly.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for DB sessions, token config and
  the password hashing context.
- Encapsulate app.state access patterns.
- Reject query parameters a list endpoint does not recognize.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobly.auth.jwt import JwtConfig
from jobly.errors import ValidationError


def jwt_config_dep(request: Request) -> JwtConfig:
    return request.app.state.jwt_config  # type: ignore[attr-defined]


def pwd_context_dep(request: Request) -> CryptContext:
    return request.app.state.pwd_context  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the app lifespan (`jobly.api.app.create_app`).
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped session. Handlers commit explicitly after a successful mutation.
    async with session_factory() as session:
        yield session


def forbid_unknown_query(*allowed: str):
    allowed_set = frozenset(allowed)

    def _dep(request: Request) -> None:
        unknown = sorted(set(request.query_params.keys()) - allowed_set)
        if unknown:
            raise ValidationError([f"unknown filter: {name}" for name in unknown])

    return _dep
