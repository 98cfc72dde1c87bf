"""
jobly.api.routers.auth

Login and self-registration endpoints.

Responsibilities:
- Exchange username/password for a signed token.
- Register a (non-admin) user and return a token for them.
- Echo the identity the current request was authenticated as.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from jobly.api.deps import db_session, jwt_config_dep, pwd_context_dep
from jobly.api.schemas import LoginRequest, RegisterRequest, TokenResponse
from jobly.auth.deps import ensure_logged_in
from jobly.auth.jwt import JwtConfig, issue_token
from jobly.auth.models import Identity
from jobly.db.repositories.users import UserRepo
from jobly.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(db_session),
    jwt_config: JwtConfig = Depends(jwt_config_dep),
    pwd_context: CryptContext = Depends(pwd_context_dep),
) -> TokenResponse:
    user = await UserRepo(session, pwd_context).authenticate(body.username, body.password)
    token = issue_token(cfg=jwt_config, username=user["username"], is_admin=user["is_admin"])
    return TokenResponse(token=token)


@router.post("/register", response_model=TokenResponse, status_code=HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    session: AsyncSession = Depends(db_session),
    jwt_config: JwtConfig = Depends(jwt_config_dep),
    pwd_context: CryptContext = Depends(pwd_context_dep),
) -> TokenResponse:
    # Self-registration never grants admin.
    user = await UserRepo(session, pwd_context).register(**body.model_dump(), is_admin=False)
    await session.commit()
    log.info("user.registered", username=user["username"])
    token = issue_token(cfg=jwt_config, username=user["username"], is_admin=False)
    return TokenResponse(token=token)


@router.get("/me")
async def whoami(identity: Identity = Depends(ensure_logged_in)) -> dict[str, Any]:
    return {"user": identity.to_dict()}
