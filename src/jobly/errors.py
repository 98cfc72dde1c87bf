"""
jobly.errors

Typed error taxonomy shared by repositories, policy checks and the API layer.

Responsibilities:
- Carry an HTTP status and a user-visible message on each error kind.
- Stay free of any web framework import so lower layers can raise them.
"""

from __future__ import annotations

from typing import Any


class JoblyError(Exception):
    status_code: int = 500

    def __init__(self, message: Any = "Internal Server Error") -> None:
        super().__init__(message)
        # `message` may be a list of validation messages.
        self.message = message


class ValidationError(JoblyError):
    """Bad input: empty updates, duplicates, dangling references."""

    status_code = 400

    def __init__(self, message: Any = "Bad Request") -> None:
        super().__init__(message)


class UnauthorizedError(JoblyError):
    status_code = 401

    def __init__(self, message: Any = "Unauthorized") -> None:
        super().__init__(message)


class NotFoundError(JoblyError):
    status_code = 404

    def __init__(self, message: Any = "Not Found") -> None:
        super().__init__(message)


# --- Module Notes -----------------------------------------------------------
# The status mapping lives on the classes; `jobly.api.errors` renders them.
