"""
jobly.db.repositories.users

Repository for users and their job applications.

Responsibilities:
- Register users with hashed passwords and authenticate logins.
- List, fetch, partially update and delete users.
- Record a user's application to a job.
"""

from __future__ import annotations

from typing import Any

from passlib.context import CryptContext
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.auth.passwords import hash_password, verify_password
from jobly.db.sql import bind_params, build_update_fragment, next_placeholder
from jobly.errors import NotFoundError, UnauthorizedError, ValidationError

_COLUMNS = "username, first_name, last_name, email, is_admin"

_COLUMN_MAP = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def _user(row: Any) -> dict[str, Any]:
    user = dict(row)
    user.pop("password", None)
    # SQLite stores booleans as 0/1.
    user["is_admin"] = bool(user["is_admin"])
    return user


class UserRepo:
    def __init__(self, session: AsyncSession, pwd_context: CryptContext) -> None:
        self._session = session
        self._pwd_context = pwd_context

    async def authenticate(self, username: str, password: str) -> dict[str, Any]:
        result = await self._session.execute(
            text(f"SELECT {_COLUMNS}, password FROM users WHERE username = :username"),
            {"username": username},
        )
        row = result.mappings().first()
        if row is not None and verify_password(self._pwd_context, password, row["password"]):
            return _user(row)
        raise UnauthorizedError("Invalid username/password")

    async def register(
        self,
        *,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        email: str,
        is_admin: bool = False,
    ) -> dict[str, Any]:
        duplicate = await self._session.execute(
            text("SELECT username FROM users WHERE username = :username"),
            {"username": username},
        )
        if duplicate.first() is not None:
            raise ValidationError(f"Duplicate username: {username}")

        result = await self._session.execute(
            text(
                f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                    VALUES (:username, :password, :first_name, :last_name, :email, :is_admin)
                    RETURNING {_COLUMNS}"""
            ),
            {
                "username": username,
                "password": hash_password(self._pwd_context, password),
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "is_admin": is_admin,
            },
        )
        return _user(result.mappings().one())

    async def find_all(self) -> list[dict[str, Any]]:
        result = await self._session.execute(
            text(f"SELECT {_COLUMNS} FROM users ORDER BY username")
        )
        return [_user(row) for row in result.mappings().all()]

    async def get(self, username: str) -> dict[str, Any]:
        """
        Returns the user plus the ids of jobs applied to: {..., "jobs": [id, ...]}.
        """

        result = await self._session.execute(
            text(f"SELECT {_COLUMNS} FROM users WHERE username = :username"),
            {"username": username},
        )
        row = result.mappings().first()
        if row is None:
            raise NotFoundError(f"No user: {username}")

        applications = await self._session.execute(
            text(
                """SELECT job_id
                   FROM applications
                   WHERE username = :username
                   ORDER BY job_id"""
            ),
            {"username": username},
        )
        user = _user(row)
        user["jobs"] = list(applications.scalars().all())
        return user

    async def update(self, username: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Partial update keyed by API field names (firstName, lastName, email,
        password, isAdmin). A new password is hashed before it is stored.
        """

        data = dict(data)
        if data.get("password") is not None:
            data["password"] = hash_password(self._pwd_context, data["password"])

        set_cols, values = build_update_fragment(data, _COLUMN_MAP)
        username_param = next_placeholder(values)
        result = await self._session.execute(
            text(
                f"""UPDATE users
                    SET {set_cols}
                    WHERE username = :{username_param}
                    RETURNING {_COLUMNS}"""
            ),
            {**bind_params(values), username_param: username},
        )
        row = result.mappings().first()
        if row is None:
            raise NotFoundError(f"No user: {username}")
        return _user(row)

    async def remove(self, username: str) -> None:
        result = await self._session.execute(
            text("DELETE FROM users WHERE username = :username RETURNING username"),
            {"username": username},
        )
        if result.first() is None:
            raise NotFoundError(f"No user: {username}")

    async def apply_for_job(self, username: str, job_id: int) -> None:
        job = await self._session.execute(
            text("SELECT id FROM jobs WHERE id = :id"), {"id": job_id}
        )
        if job.first() is None:
            raise NotFoundError(f"No job: {job_id}")

        user = await self._session.execute(
            text("SELECT username FROM users WHERE username = :username"),
            {"username": username},
        )
        if user.first() is None:
            raise NotFoundError(f"No user: {username}")

        # Duplicates, including concurrent ones, insert nothing.
        result = await self._session.execute(
            text(
                """INSERT INTO applications (username, job_id)
                   VALUES (:username, :job_id)
                   ON CONFLICT (username, job_id) DO NOTHING"""
            ),
            {"username": username, "job_id": job_id},
        )
        if result.rowcount == 0:
            raise ValidationError(f"Already applied to job: {job_id}")
