"""
tests.test_unit_of_work

Transaction boundary and retry behaviour of `UnitOfWork`.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.db.repositories.users import UserRepo
from learnhub.db.unit_of_work import UnitOfWork, is_transient
from learnhub.errors import InternalError, NotFound


def _operational() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("database is locked"))


def _integrity() -> IntegrityError:
    return IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))


def _uow(app: FastAPI, attempts: int = 3) -> UnitOfWork:
    return UnitOfWork(app.state.sessionmaker, attempts=attempts, backoff_seconds=0.0)


def test_transient_classification() -> None:
    assert is_transient(_operational())
    assert not is_transient(_integrity())
    assert is_transient(DBAPIError("SELECT 1", {}, Exception("gone"), connection_invalidated=True))
    assert not is_transient(NotFound())


@pytest.mark.asyncio
async def test_transient_failure_is_retried_then_succeeds(app: FastAPI) -> None:
    calls = 0

    async def work(session: AsyncSession) -> str:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise _operational()
        return "ok"

    assert await _uow(app).run(work) == "ok"
    assert calls == 2


@pytest.mark.asyncio
async def test_exhausted_retries_surface_as_internal_error(app: FastAPI) -> None:
    calls = 0

    async def work(session: AsyncSession) -> None:
        nonlocal calls
        calls += 1
        raise _operational()

    with pytest.raises(InternalError) as exc_info:
        await _uow(app, attempts=3).run(work)

    assert calls == 3
    # Driver detail stays in the logs.
    assert "locked" not in exc_info.value.message


@pytest.mark.asyncio
async def test_domain_errors_are_not_retried(app: FastAPI) -> None:
    calls = 0

    async def work(session: AsyncSession) -> None:
        nonlocal calls
        calls += 1
        raise NotFound("Course not found")

    with pytest.raises(NotFound):
        await _uow(app).run(work)
    assert calls == 1


@pytest.mark.asyncio
async def test_integrity_errors_are_wrapped_without_retry(app: FastAPI) -> None:
    calls = 0

    async def work(session: AsyncSession) -> None:
        nonlocal calls
        calls += 1
        raise _integrity()

    with pytest.raises(InternalError):
        await _uow(app).run(work)
    assert calls == 1


@pytest.mark.asyncio
async def test_failed_unit_rolls_back_its_writes(app: FastAPI) -> None:
    async def work(session: AsyncSession) -> None:
        await UserRepo(session).create(
            username="rollback",
            password_hash="not-a-real-hash",
            email="rollback@example.com",
            first_name="Roll",
            last_name="Back",
        )
        raise NotFound()

    with pytest.raises(NotFound):
        await _uow(app).run(work)

    async def lookup(session: AsyncSession) -> object:
        return await UserRepo(session).get_by_username("rollback")

    assert await _uow(app).run(lookup) is None
