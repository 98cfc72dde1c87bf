"""
jobly.api.routers.users

User endpoints.

Responsibilities:
- Admin-only user creation (may create admins) and listing.
- Admin-or-self reads, partial updates, deletes and job applications.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from jobly.api.deps import db_session, jwt_config_dep, pwd_context_dep
from jobly.api.schemas import (
    AppliedOut,
    AppliedResponse,
    DeletedResponse,
    UserCreatedResponse,
    UserDetailResponse,
    UserListResponse,
    UserNew,
    UserResponse,
    UserUpdate,
)
from jobly.auth.deps import ensure_admin, ensure_admin_or_self
from jobly.auth.jwt import JwtConfig, issue_token
from jobly.db.repositories.users import UserRepo
from jobly.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _repo(
    session: AsyncSession = Depends(db_session),
    pwd_context: CryptContext = Depends(pwd_context_dep),
) -> UserRepo:
    return UserRepo(session, pwd_context)


@router.post(
    "",
    response_model=UserCreatedResponse,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(ensure_admin)],
)
async def create_user(
    body: UserNew,
    session: AsyncSession = Depends(db_session),
    users: UserRepo = Depends(_repo),
    jwt_config: JwtConfig = Depends(jwt_config_dep),
) -> dict[str, Any]:
    user = await users.register(**body.model_dump())
    await session.commit()
    log.info("user.created", username=user["username"], is_admin=user["is_admin"])
    token = issue_token(cfg=jwt_config, username=user["username"], is_admin=user["is_admin"])
    return {"user": user, "token": token}


@router.get("", response_model=UserListResponse, dependencies=[Depends(ensure_admin)])
async def list_users(users: UserRepo = Depends(_repo)) -> dict[str, Any]:
    return {"users": await users.find_all()}


@router.get(
    "/{username}",
    response_model=UserDetailResponse,
    dependencies=[Depends(ensure_admin_or_self)],
)
async def get_user(username: str, users: UserRepo = Depends(_repo)) -> dict[str, Any]:
    return {"user": await users.get(username)}


@router.patch(
    "/{username}",
    response_model=UserResponse,
    dependencies=[Depends(ensure_admin_or_self)],
)
async def update_user(
    username: str,
    body: UserUpdate,
    session: AsyncSession = Depends(db_session),
    users: UserRepo = Depends(_repo),
) -> dict[str, Any]:
    user = await users.update(username, body.model_dump(by_alias=True, exclude_unset=True))
    await session.commit()
    return {"user": user}


@router.delete(
    "/{username}",
    response_model=DeletedResponse,
    dependencies=[Depends(ensure_admin_or_self)],
)
async def delete_user(
    username: str,
    session: AsyncSession = Depends(db_session),
    users: UserRepo = Depends(_repo),
) -> DeletedResponse:
    await users.remove(username)
    await session.commit()
    return DeletedResponse(deleted=username)


@router.post(
    "/{username}/jobs/{job_id}",
    response_model=AppliedResponse,
    dependencies=[Depends(ensure_admin_or_self)],
)
async def apply_for_job(
    username: str,
    job_id: int,
    session: AsyncSession = Depends(db_session),
    users: UserRepo = Depends(_repo),
) -> AppliedResponse:
    await users.apply_for_job(username, job_id)
    await session.commit()
    return AppliedResponse(user=AppliedOut(applied=job_id))
