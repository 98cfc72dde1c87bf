"""
jobly.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue tokens carrying the `username` / `isAdmin` claims.
- Decode and validate tokens against the shared signing secret.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from jobly.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    secret: str
    ttl: timedelta | None = None


class JwtValidationError(Exception):
    pass


def jwt_config_from_settings(settings: Settings) -> JwtConfig:
    ttl = (
        timedelta(minutes=settings.token_ttl_minutes)
        if settings.token_ttl_minutes is not None
        else None
    )
    return JwtConfig(alg=settings.jwt_alg, secret=settings.secret_key, ttl=ttl)


def issue_token(*, cfg: JwtConfig, username: str, is_admin: bool = False) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "username": username,
        "isAdmin": is_admin,
        "iat": int(now.timestamp()),
    }
    if cfg.ttl is not None:
        payload["exp"] = int((now + cfg.ttl).timestamp())
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        # `exp` is verified whenever present; `iat` is always required.
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            options={"require": ["iat"]},
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


# --- Module Notes -----------------------------------------------------------
# Tokens are issued by `api/routers/auth.py` (login/register) and
# `api/routers/users.py` (admin-created users).
