"""
jobly.api.routers.jobs

Job endpoints.

Responsibilities:
- Public listing (with filters) and detail reads.
- Admin-only create, partial update and delete.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from jobly.api.deps import db_session, forbid_unknown_query
from jobly.api.schemas import (
    DeletedResponse,
    JobListResponse,
    JobNew,
    JobResponse,
    JobUpdate,
    JobUpdatedResponse,
)
from jobly.auth.deps import ensure_admin
from jobly.db.filters import JobFilters
from jobly.db.repositories.jobs import JobRepo

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post(
    "",
    response_model=JobResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(ensure_admin)],
)
async def create_job(
    body: JobNew,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    job = await JobRepo(session).create(**body.model_dump())
    await session.commit()
    return {"job": job}


@router.get(
    "",
    response_model=JobListResponse,
    dependencies=[Depends(forbid_unknown_query("title", "minSalary", "hasEquity"))],
)
async def list_jobs(
    title: str | None = Query(default=None, min_length=1),
    min_salary: int | None = Query(default=None, alias="minSalary", ge=0),
    has_equity: bool | None = Query(default=None, alias="hasEquity"),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    filters = JobFilters(title=title, min_salary=min_salary, has_equity=has_equity)
    return {"jobs": await JobRepo(session).find_all(filters)}


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: int,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    return {"job": await JobRepo(session).get(job_id)}


@router.patch(
    "/{job_id}",
    response_model=JobUpdatedResponse,
    dependencies=[Depends(ensure_admin)],
)
async def update_job(
    job_id: int,
    body: JobUpdate,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    job = await JobRepo(session).update(job_id, body.model_dump(by_alias=True, exclude_unset=True))
    await session.commit()
    return {"job": job}


@router.delete(
    "/{job_id}",
    response_model=DeletedResponse,
    dependencies=[Depends(ensure_admin)],
)
async def delete_job(
    job_id: int,
    session: AsyncSession = Depends(db_session),
) -> DeletedResponse:
    await JobRepo(session).remove(job_id)
    await session.commit()
    return DeletedResponse(deleted=str(job_id))
