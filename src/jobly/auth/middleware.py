"""
jobly.auth.middleware

Request authentication.

Responsibilities:
- Read an `Authorization: Bearer <token>` header, verify it, and attach the
  decoded `Identity` to `request.state.user`.
- Degrade to an anonymous request (`request.state.user = None`) on any
  failure. Enforcement is left to the policy checks in `jobly.auth.policy`.
"""

from __future__ import annotations

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import HTTPConnection, Request
from starlette.responses import Response

from jobly.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from jobly.auth.models import Identity
from jobly.observability.logging import get_logger

log = get_logger(__name__)


def _bearer_token(conn: HTTPConnection) -> str | None:
    header = conn.headers.get("authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def authenticate(conn: HTTPConnection, cfg: JwtConfig) -> None:
    """
    Populate `conn.state.user` from the bearer token, or set it to None.

    Never raises: a missing, malformed, expired or foreign-signed token just
    leaves the request anonymous.
    """

    conn.state.user = None
    token = _bearer_token(conn)
    if token is None:
        return

    try:
        claims = decode_and_validate(cfg=cfg, token=token)
        identity = Identity.from_claims(claims)
    except (JwtValidationError, ValueError) as e:
        log.debug("auth.token_rejected", reason=str(e))
        return

    conn.state.user = identity
    structlog.contextvars.bind_contextvars(username=identity.username)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, jwt_config: JwtConfig) -> None:
        super().__init__(app)
        self._jwt_config = jwt_config

    async def dispatch(self, request: Request, call_next) -> Response:
        authenticate(request, self._jwt_config)
        return await call_next(request)


# --- Module Notes -----------------------------------------------------------
# Starlette shares `request.state` between middleware and the endpoint's
# Request object, so handlers read the identity through `auth.deps`.
