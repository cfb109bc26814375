"""
learnhub.db.repositories.users

Repository for `User` entities (the credential store).

Responsibilities:
- Look users up by id, username or email.
- Insert new users; delete users for administrative processes (cascades in the DB).
"""

from __future__ import annotations

import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.auth.models import Role
from learnhub.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        username: str,
        password_hash: str,
        email: str,
        first_name: str,
        last_name: str,
        role: Role = Role.student,
    ) -> User:
        user = User(
            username=username,
            password_hash=password_hash,
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def delete(self, user_id: uuid.UUID) -> int:
        result = await self._session.execute(delete(User).where(User.id == user_id))
        return result.rowcount or 0
