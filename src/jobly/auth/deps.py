"""
jobly.auth.deps

FastAPI dependency functions for authorization.

Responsibilities:
- Expose the identity attached by `AuthenticationMiddleware`.
- Wrap the policy checks so routers can declare them as dependencies.
"""

from __future__ import annotations

from fastapi import Depends, Request

from jobly.auth.models import Identity
from jobly.auth.policy import require_admin, require_admin_or_self, require_logged_in


def current_identity(request: Request) -> Identity | None:
    return getattr(request.state, "user", None)


def ensure_logged_in(identity: Identity | None = Depends(current_identity)) -> Identity:
    return require_logged_in(identity)


def ensure_admin(identity: Identity | None = Depends(current_identity)) -> Identity:
    return require_admin(identity)


def ensure_admin_or_self(
    username: str,
    identity: Identity | None = Depends(current_identity),
) -> Identity:
    # `username` is resolved from the route path (`/users/{username}`).
    return require_admin_or_self(identity, username)


# --- Module Notes -----------------------------------------------------------
# Routers list these in `dependencies=[...]` so the check runs before the
# handler body touches the database.
