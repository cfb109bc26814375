"""
tests.conftest

Shared fixtures for the LearnHub test-suite.

Responsibilities:
- Build an app per test backed by a fresh SQLite file database.
- Provide an in-process httpx client and helpers to create accounts with a role.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.api.app import create_app
from learnhub.auth.models import Role
from learnhub.auth.passwords import hash_password
from learnhub.db.models import User
from learnhub.db.repositories.users import UserRepo
from learnhub.settings import Settings

TEST_SECRET = "test-signing-key-0123456789abcdef0123"
DEFAULT_PASSWORD = "correct-horse-battery"


@dataclass(frozen=True)
class Account:
    id: uuid.UUID
    username: str
    role: Role
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


MakeAccount = Callable[..., Awaitable[Account]]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'learnhub.db'}",
        jwt_secret=TEST_SECRET,
        db_retry_backoff_seconds=0.0,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def make_account(app: FastAPI, client: httpx.AsyncClient) -> MakeAccount:
    """
    Create a user directly in the store (there is no HTTP path for granting roles)
    and log in through the API to obtain a real token.
    """

    async def _make(username: str, role: Role = Role.student) -> Account:
        async def work(session: AsyncSession) -> User:
            return await UserRepo(session).create(
                username=username,
                password_hash=hash_password(DEFAULT_PASSWORD),
                email=f"{username}@example.com",
                first_name=username.title(),
                last_name="Tester",
                role=role,
            )

        user = await app.state.unit_of_work.run(work)
        r = await client.post("/login", json={"username": username, "password": DEFAULT_PASSWORD})
        assert r.status_code == 200, r.text
        return Account(id=user.id, username=username, role=role, token=r.json()["token"])

    return _make
