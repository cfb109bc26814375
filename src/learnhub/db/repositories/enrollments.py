"""
learnhub.db.repositories.enrollments

Repository for `Enrollment` entities.

Responsibilities:
- Insert an enrollment (the composite primary key rejects duplicates).
- List a user's enrolled courses joined with course details.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.db.models import Course, Enrollment


@dataclass(frozen=True, slots=True)
class EnrolledCourse:
    course_id: uuid.UUID
    title: str
    description: str | None
    enrollment_date: datetime


class EnrollmentRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, user_id: uuid.UUID, course_id: uuid.UUID) -> Enrollment:
        enrollment = Enrollment(user_id=user_id, course_id=course_id)
        self._session.add(enrollment)
        await self._session.flush()
        return enrollment

    async def count(
        self, *, user_id: uuid.UUID | None = None, course_id: uuid.UUID | None = None
    ) -> int:
        stmt = select(func.count()).select_from(Enrollment)
        if user_id is not None:
            stmt = stmt.where(Enrollment.user_id == user_id)
        if course_id is not None:
            stmt = stmt.where(Enrollment.course_id == course_id)
        return int((await self._session.execute(stmt)).scalar_one())

    async def list_for_user(self, user_id: uuid.UUID) -> list[EnrolledCourse]:
        stmt = (
            select(Course.id, Course.title, Course.description, Enrollment.enrollment_date)
            .join(Course, Enrollment.course_id == Course.id)
            .where(Enrollment.user_id == user_id)
            .order_by(desc(Enrollment.enrollment_date))
        )
        rows = (await self._session.execute(stmt)).all()
        return [
            EnrolledCourse(
                course_id=row[0], title=row[1], description=row[2], enrollment_date=row[3]
            )
            for row in rows
        ]


# --- Module Notes -----------------------------------------------------------
# Enrollments are never updated or deleted directly; they disappear only through
# the ON DELETE CASCADE of their user or course.
