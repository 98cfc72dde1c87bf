"""
jobly.auth.models

Auth domain models.

Responsibilities:
- Define the request-scoped caller identity (`Identity`) decoded from a token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Authenticated caller identity. Absence of an identity means anonymous.
    """

    username: str
    is_admin: bool
    iat: int

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Identity:
        username = claims.get("username")
        is_admin = claims.get("isAdmin", False)
        iat = claims.get("iat")
        if not isinstance(username, str) or not username:
            raise ValueError("token has no username claim")
        if not isinstance(is_admin, bool):
            raise ValueError("isAdmin claim must be a boolean")
        if isinstance(iat, bool) or not isinstance(iat, int | float):
            raise ValueError("iat claim must be a number")
        return cls(username=username, is_admin=is_admin, iat=int(iat))

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "isAdmin": self.is_admin, "iat": self.iat}
