"""
jobly.auth.policy

Authorization decisions over the request identity.

Each check is pure: it returns the identity when access is granted and
raises `UnauthorizedError` otherwise.
"""

from __future__ import annotations

from jobly.auth.models import Identity
from jobly.errors import UnauthorizedError


def require_logged_in(identity: Identity | None) -> Identity:
    if identity is None:
        raise UnauthorizedError()
    return identity


def require_admin(identity: Identity | None) -> Identity:
    identity = require_logged_in(identity)
    if not identity.is_admin:
        raise UnauthorizedError()
    return identity


def require_admin_or_self(identity: Identity | None, username: str) -> Identity:
    identity = require_logged_in(identity)
    if not (identity.is_admin or identity.username == username):
        raise UnauthorizedError()
    return identity
