"""
learnhub.db.repositories.courses

Repository for `Course` entities.

Responsibilities:
- Create, list and fetch courses.
- Fetch a course with a row lock for the ownership re-check before a write.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.db.models import Course


class CourseRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self, *, title: str, description: str | None, instructor_id: uuid.UUID
    ) -> Course:
        course = Course(title=title, description=description, instructor_id=instructor_id)
        self._session.add(course)
        await self._session.flush()
        return course

    async def list_all(self) -> list[Course]:
        stmt = select(Course).order_by(desc(Course.created_at))
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, course_id: uuid.UUID) -> Course | None:
        return await self._session.get(Course, course_id)

    async def get_for_update(self, course_id: uuid.UUID) -> Course | None:
        # populate_existing: never authorize against a copy cached earlier in the session.
        return await self._session.get(
            Course, course_id, with_for_update=True, populate_existing=True
        )

    async def update(
        self,
        course: Course,
        *,
        title: str | None = None,
        description: str | None = None,
        set_description: bool = False,
    ) -> Course:
        if title is not None:
            course.title = title
        if set_description:
            course.description = description
        course.updated_at = datetime.now(tz=UTC)
        await self._session.flush()
        return course

    async def delete(self, course_id: uuid.UUID) -> int:
        result = await self._session.execute(delete(Course).where(Course.id == course_id))
        return result.rowcount or 0
