"""
tests.conftest

Shared fixtures: per-test SQLite database, seeded data, app client and tokens.

Seed data:
- companies c1..c3 (numEmployees 1..3)
- users u1..u3 and adminuser (admin)
- jobs "Developer 1" x2 at c1, "Developer 2" at c2
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.api.app import create_app
from jobly.auth.jwt import JwtConfig, issue_token, jwt_config_from_settings
from jobly.auth.passwords import build_crypt_context
from jobly.db.init_db import init_db
from jobly.db.repositories.companies import CompanyRepo
from jobly.db.repositories.jobs import JobRepo
from jobly.db.repositories.users import UserRepo
from jobly.db.session import create_engine, create_sessionmaker
from jobly.settings import Settings

TEST_SECRET = "jobly-test-secret"


async def _seed(session: AsyncSession, pwd_context: CryptContext) -> list[int]:
    companies = CompanyRepo(session)
    for n in (1, 2, 3):
        await companies.create(
            handle=f"c{n}",
            name=f"C{n}",
            description=f"Desc{n}",
            num_employees=n,
            logo_url=f"http://c{n}.img",
        )

    users = UserRepo(session, pwd_context)
    for n in (1, 2, 3):
        await users.register(
            username=f"u{n}",
            password=f"password{n}",
            first_name=f"U{n}F",
            last_name=f"U{n}L",
            email=f"user{n}@user.com",
        )
    await users.register(
        username="adminuser",
        password="password",
        first_name="admin",
        last_name="user",
        email="admin@user.com",
        is_admin=True,
    )

    jobs = JobRepo(session)
    job_ids = []
    for title, salary, equity, handle in (
        ("Developer 1", 1111, 0.1, "c1"),
        ("Developer 1", 1111, 0.1, "c1"),
        ("Developer 2", 2222, 0.2, "c2"),
    ):
        job = await jobs.create(title=title, salary=salary, equity=equity, company_handle=handle)
        job_ids.append(job["id"])

    await session.commit()
    return job_ids


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        secret_key=TEST_SECRET,
        bcrypt_work_factor=4,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'jobly_test.db'}",
    )


@pytest.fixture
def jwt_config(settings: Settings) -> JwtConfig:
    return jwt_config_from_settings(settings)


@pytest.fixture
def pwd_context(settings: Settings) -> CryptContext:
    return build_crypt_context(rounds=settings.bcrypt_work_factor)


@pytest.fixture
def u1_token(jwt_config: JwtConfig) -> str:
    return issue_token(cfg=jwt_config, username="u1", is_admin=False)


@pytest.fixture
def admin_token(jwt_config: JwtConfig) -> str:
    return issue_token(cfg=jwt_config, username="adminuser", is_admin=True)


@pytest_asyncio.fixture
async def session(settings: Settings, pwd_context: CryptContext) -> AsyncIterator[AsyncSession]:
    """Seeded session for repository tests."""
    engine = create_engine(settings)
    await init_db(engine)
    try:
        async with create_sessionmaker(engine)() as session:
            await _seed(session, pwd_context)
            yield session
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not drive lifespan; run it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def job_ids(app: FastAPI) -> list[int]:
    async with app.state.sessionmaker() as session:
        return await _seed(session, app.state.pwd_context)


@pytest_asyncio.fixture
async def client(app: FastAPI, job_ids: list[int]) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


def bearer(token: str) -> dict[str, str]:
    return {"authorization": f"Bearer {token}"}


@pytest.fixture
def auth_header():
    return bearer
