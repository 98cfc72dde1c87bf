"""
jobly.db.repositories.jobs

Repository for jobs.

Responsibilities:
- Create jobs against an existing company.
- List (with filters), fetch, partially update and delete jobs; reads embed
  the owning company.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.db.filters import JobFilters, build_filter_clause
from jobly.db.sql import bind_params, build_update_fragment, next_placeholder
from jobly.errors import NotFoundError, ValidationError

_SELECT_WITH_COMPANY = """
    SELECT j.id,
           j.title,
           j.salary,
           j.equity,
           c.handle,
           c.name,
           c.num_employees,
           c.description,
           c.logo_url
    FROM jobs j
    INNER JOIN companies c ON c.handle = j.company_handle
"""


def normalize_equity(value: Any) -> Decimal | None:
    # SQLite hands back floats for NUMERIC; go through str() to keep "0.1" exact.
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _job_with_company(row: Any) -> dict[str, Any]:
    return {
        "id": row["id"],
        "title": row["title"],
        "salary": row["salary"],
        "equity": normalize_equity(row["equity"]),
        "company": {
            "handle": row["handle"],
            "name": row["name"],
            "num_employees": row["num_employees"],
            "description": row["description"],
            "logo_url": row["logo_url"],
        },
    }


class JobRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        title: str,
        salary: int | None,
        equity: float | Decimal | None,
        company_handle: str,
    ) -> dict[str, Any]:
        company = await self._session.execute(
            text(
                """SELECT handle, name, num_employees, description, logo_url
                   FROM companies
                   WHERE handle = :handle"""
            ),
            {"handle": company_handle},
        )
        company_row = company.mappings().first()
        if company_row is None:
            raise ValidationError(f"Company handle not found: {company_handle}")

        result = await self._session.execute(
            text(
                """INSERT INTO jobs (title, salary, equity, company_handle)
                   VALUES (:title, :salary, :equity, :company_handle)
                   RETURNING id, title, salary, equity"""
            ),
            {
                "title": title,
                "salary": salary,
                "equity": float(equity) if equity is not None else None,
                "company_handle": company_handle,
            },
        )
        job = dict(result.mappings().one())
        job["equity"] = normalize_equity(job["equity"])
        job["company"] = dict(company_row)
        return job

    async def find_all(self, filters: JobFilters | None = None) -> list[dict[str, Any]]:
        where = build_filter_clause(filters)
        result = await self._session.execute(
            text(f"{_SELECT_WITH_COMPANY} {where.sql} ORDER BY j.title, j.id"),
            where.params,
        )
        return [_job_with_company(row) for row in result.mappings().all()]

    async def get(self, job_id: int) -> dict[str, Any]:
        result = await self._session.execute(
            text(f"{_SELECT_WITH_COMPANY} WHERE j.id = :id"),
            {"id": job_id},
        )
        row = result.mappings().first()
        if row is None:
            raise NotFoundError(f"No job: {job_id}")
        return _job_with_company(row)

    async def update(self, job_id: int, data: dict[str, Any]) -> dict[str, Any]:
        """
        Partial update of title/salary/equity. Returns the row with `company_handle`.
        """

        data = {
            key: float(value) if isinstance(value, Decimal) else value
            for key, value in data.items()
        }
        set_cols, values = build_update_fragment(data, {})
        id_param = next_placeholder(values)
        result = await self._session.execute(
            text(
                f"""UPDATE jobs
                    SET {set_cols}
                    WHERE id = :{id_param}
                    RETURNING id, title, salary, equity, company_handle"""
            ),
            {**bind_params(values), id_param: job_id},
        )
        row = result.mappings().first()
        if row is None:
            raise NotFoundError(f"No job: {job_id}")
        job = dict(row)
        job["equity"] = normalize_equity(job["equity"])
        return job

    async def remove(self, job_id: int) -> None:
        result = await self._session.execute(
            text("DELETE FROM jobs WHERE id = :id RETURNING id"),
            {"id": job_id},
        )
        if result.first() is None:
            raise NotFoundError(f"No job: {job_id}")
