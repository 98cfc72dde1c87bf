"""
jobly.db.repositories.companies

Repository for companies.

Responsibilities:
- Create, list (with filters), fetch, partially update and delete companies.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.db.filters import CompanyFilters, build_filter_clause
from jobly.db.repositories.jobs import normalize_equity
from jobly.db.sql import bind_params, build_update_fragment, next_placeholder
from jobly.errors import NotFoundError, ValidationError

_COLUMNS = "handle, name, description, num_employees, logo_url"

# Logical (API) field names whose column differs.
_COLUMN_MAP = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


class CompanyRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        handle: str,
        name: str,
        description: str,
        num_employees: int | None = None,
        logo_url: str | None = None,
    ) -> dict[str, Any]:
        duplicate = await self._session.execute(
            text("SELECT handle FROM companies WHERE handle = :handle"),
            {"handle": handle},
        )
        if duplicate.first() is not None:
            raise ValidationError(f"Duplicate company: {handle}")
        await self._ensure_name_free(name)

        result = await self._session.execute(
            text(
                f"""INSERT INTO companies ({_COLUMNS})
                    VALUES (:handle, :name, :description, :num_employees, :logo_url)
                    RETURNING {_COLUMNS}"""
            ),
            {
                "handle": handle,
                "name": name,
                "description": description,
                "num_employees": num_employees,
                "logo_url": logo_url,
            },
        )
        return dict(result.mappings().one())

    async def _ensure_name_free(self, name: str, *, exclude_handle: str | None = None) -> None:
        # `companies.name` is unique; report a clash before the statement hits it.
        result = await self._session.execute(
            text("SELECT handle FROM companies WHERE name = :name"),
            {"name": name},
        )
        for (owner,) in result.all():
            if owner != exclude_handle:
                raise ValidationError(f"Duplicate company name: {name}")

    async def find_all(self, filters: CompanyFilters | None = None) -> list[dict[str, Any]]:
        where = build_filter_clause(filters)
        result = await self._session.execute(
            text(f"SELECT {_COLUMNS} FROM companies {where.sql} ORDER BY name"),
            where.params,
        )
        return [dict(row) for row in result.mappings().all()]

    async def get(self, handle: str) -> dict[str, Any]:
        """
        Returns the company with its jobs: {..., "jobs": [{id, title, salary, equity}, ...]}.
        """

        result = await self._session.execute(
            text(f"SELECT {_COLUMNS} FROM companies WHERE handle = :handle"),
            {"handle": handle},
        )
        row = result.mappings().first()
        if row is None:
            raise NotFoundError(f"No company: {handle}")

        jobs = await self._session.execute(
            text(
                """SELECT id, title, salary, equity
                   FROM jobs
                   WHERE company_handle = :handle
                   ORDER BY id"""
            ),
            {"handle": handle},
        )
        company = dict(row)
        company["jobs"] = [
            {**job, "equity": normalize_equity(job["equity"])} for job in jobs.mappings().all()
        ]
        return company

    async def update(self, handle: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Partial update: only the supplied fields change.

        `data` is keyed by API field names (name, description, numEmployees, logoUrl).
        """

        if data.get("name") is not None:
            await self._ensure_name_free(data["name"], exclude_handle=handle)

        set_cols, values = build_update_fragment(data, _COLUMN_MAP)
        handle_param = next_placeholder(values)
        result = await self._session.execute(
            text(
                f"""UPDATE companies
                    SET {set_cols}
                    WHERE handle = :{handle_param}
                    RETURNING {_COLUMNS}"""
            ),
            {**bind_params(values), handle_param: handle},
        )
        row = result.mappings().first()
        if row is None:
            raise NotFoundError(f"No company: {handle}")
        return dict(row)

    async def remove(self, handle: str) -> None:
        result = await self._session.execute(
            text("DELETE FROM companies WHERE handle = :handle RETURNING handle"),
            {"handle": handle},
        )
        if result.first() is None:
            raise NotFoundError(f"No company: {handle}")
