"""
jobly.api.routers.companies

Company endpoints.

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
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyNew,
    CompanyResponse,
    CompanyUpdate,
    DeletedResponse,
)
from jobly.auth.deps import ensure_admin
from jobly.db.filters import CompanyFilters
from jobly.db.repositories.companies import CompanyRepo
from jobly.errors import ValidationError

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(ensure_admin)],
)
async def create_company(
    body: CompanyNew,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    company = await CompanyRepo(session).create(**body.model_dump())
    await session.commit()
    return {"company": company}


@router.get(
    "",
    response_model=CompanyListResponse,
    dependencies=[Depends(forbid_unknown_query("nameLike", "minEmployees", "maxEmployees"))],
)
async def list_companies(
    name_like: str | None = Query(default=None, alias="nameLike", min_length=1),
    min_employees: int | None = Query(default=None, alias="minEmployees", ge=0),
    max_employees: int | None = Query(default=None, alias="maxEmployees", ge=0),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise ValidationError("minEmployees cannot be greater than maxEmployees")

    filters = CompanyFilters(
        name_like=name_like,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    return {"companies": await CompanyRepo(session).find_all(filters)}


@router.get("/{handle}", response_model=CompanyDetailResponse)
async def get_company(
    handle: str,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    return {"company": await CompanyRepo(session).get(handle)}


@router.patch(
    "/{handle}",
    response_model=CompanyResponse,
    dependencies=[Depends(ensure_admin)],
)
async def update_company(
    handle: str,
    body: CompanyUpdate,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    company = await CompanyRepo(session).update(
        handle, body.model_dump(by_alias=True, exclude_unset=True)
    )
    await session.commit()
    return {"company": company}


@router.delete(
    "/{handle}",
    response_model=DeletedResponse,
    dependencies=[Depends(ensure_admin)],
)
async def delete_company(
    handle: str,
    session: AsyncSession = Depends(db_session),
) -> DeletedResponse:
    await CompanyRepo(session).remove(handle)
    await session.commit()
    return DeletedResponse(deleted=handle)
