"""
tests.test_jobs_repo

JobRepo against a seeded SQLite database.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.db.filters import JobFilters
from jobly.db.repositories.jobs import JobRepo
from jobly.errors import NotFoundError, ValidationError

C1 = {
    "handle": "c1",
    "name": "C1",
    "num_employees": 1,
    "description": "Desc1",
    "logo_url": "http://c1.img",
}


async def _job_id(session: AsyncSession, title: str = "Developer 1") -> int:
    result = await session.execute(
        text("SELECT id FROM jobs WHERE title = :title ORDER BY id LIMIT 1"), {"title": title}
    )
    return result.scalar_one()


async def _job_count(session: AsyncSession) -> int:
    return (await session.execute(text("SELECT count(*) FROM jobs"))).scalar_one()


@pytest.mark.asyncio
async def test_create(session: AsyncSession) -> None:
    job = await JobRepo(session).create(
        title="Lead Developer", salary=100000, equity=0.75, company_handle="c1"
    )
    assert isinstance(job["id"], int)
    assert job == {
        "id": job["id"],
        "title": "Lead Developer",
        "salary": 100000,
        "equity": Decimal("0.75"),
        "company": C1,
    }


@pytest.mark.asyncio
async def test_create_with_unknown_company_inserts_nothing(session: AsyncSession) -> None:
    before = await _job_count(session)
    with pytest.raises(ValidationError):
        await JobRepo(session).create(title="x", salary=1, equity=0.1, company_handle="c9")
    assert await _job_count(session) == before


@pytest.mark.asyncio
async def test_find_all_without_filter(session: AsyncSession) -> None:
    jobs = await JobRepo(session).find_all()
    assert [(j["title"], j["salary"], j["equity"], j["company"]["handle"]) for j in jobs] == [
        ("Developer 1", 1111, Decimal("0.1"), "c1"),
        ("Developer 1", 1111, Decimal("0.1"), "c1"),
        ("Developer 2", 2222, Decimal("0.2"), "c2"),
    ]
    assert jobs[0]["company"] == C1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("filters", "expected"),
    [
        (JobFilters(title="2"), ["Developer 2"]),
        (JobFilters(title="DEVELOPER"), ["Developer 1", "Developer 1", "Developer 2"]),
        (JobFilters(min_salary=2000), ["Developer 2"]),
        (JobFilters(min_salary=0), ["Developer 1", "Developer 1", "Developer 2"]),
        (JobFilters(title="1", min_salary=2000), []),
        (JobFilters(has_equity=True), ["Developer 1", "Developer 1", "Developer 2"]),
        (JobFilters(has_equity=False), []),
    ],
)
async def test_find_all_with_filters(
    session: AsyncSession, filters: JobFilters, expected: list[str]
) -> None:
    jobs = await JobRepo(session).find_all(filters)
    assert [j["title"] for j in jobs] == expected


@pytest.mark.asyncio
async def test_has_equity_filters_with_zero_and_null_equity(session: AsyncSession) -> None:
    repo = JobRepo(session)
    await repo.create(title="Zero", salary=1, equity=0, company_handle="c3")
    await repo.create(title="Null", salary=1, equity=None, company_handle="c3")

    with_equity = [j["title"] for j in await repo.find_all(JobFilters(has_equity=True))]
    # Zero-equity jobs match `has_equity=True` as well.
    assert "Zero" in with_equity
    assert "Null" not in with_equity

    without_equity = [j["title"] for j in await repo.find_all(JobFilters(has_equity=False))]
    assert without_equity == ["Null", "Zero"]


@pytest.mark.asyncio
async def test_get(session: AsyncSession) -> None:
    job_id = await _job_id(session)
    assert await JobRepo(session).get(job_id) == {
        "id": job_id,
        "title": "Developer 1",
        "salary": 1111,
        "equity": Decimal("0.1"),
        "company": C1,
    }


@pytest.mark.asyncio
async def test_get_not_found(session: AsyncSession) -> None:
    with pytest.raises(NotFoundError):
        await JobRepo(session).get(-1)


@pytest.mark.asyncio
async def test_update(session: AsyncSession) -> None:
    job_id = await _job_id(session)
    job = await JobRepo(session).update(job_id, {"title": "New", "salary": 100, "equity": 0.99})
    assert job == {
        "id": job_id,
        "title": "New",
        "salary": 100,
        "equity": Decimal("0.99"),
        "company_handle": "c1",
    }


@pytest.mark.asyncio
async def test_partial_update_leaves_other_fields(session: AsyncSession) -> None:
    job_id = await _job_id(session)
    job = await JobRepo(session).update(job_id, {"title": "New", "equity": None})
    assert job == {
        "id": job_id,
        "title": "New",
        "salary": 1111,
        "equity": None,
        "company_handle": "c1",
    }


@pytest.mark.asyncio
async def test_update_not_found(session: AsyncSession) -> None:
    with pytest.raises(NotFoundError):
        await JobRepo(session).update(-1, {"title": "New"})


@pytest.mark.asyncio
async def test_update_without_data(session: AsyncSession) -> None:
    with pytest.raises(ValidationError):
        await JobRepo(session).update(await _job_id(session), {})


@pytest.mark.asyncio
async def test_remove(session: AsyncSession) -> None:
    job_id = await _job_id(session)
    await JobRepo(session).remove(job_id)
    result = await session.execute(text("SELECT id FROM jobs WHERE id = :id"), {"id": job_id})
    assert result.first() is None


@pytest.mark.asyncio
async def test_remove_not_found(session: AsyncSession) -> None:
    with pytest.raises(NotFoundError):
        await JobRepo(session).remove(-1)
