"""
learnhub.services.courses

Course catalog service.

Responsibilities:
- Public reads (list / get) of the catalog.
- Create courses owned by the calling instructor or admin.
- Update / delete with the ownership check folded into the same transaction
  as the write (fetch with row lock -> authorize -> mutate -> commit).
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from learnhub.auth.models import Identity
from learnhub.auth.policy import Action, authorize
from learnhub.db.models import Course
from learnhub.db.repositories.courses import CourseRepo
from learnhub.db.repositories.users import UserRepo
from learnhub.db.unit_of_work import UnitOfWork
from learnhub.errors import AuthenticationError, NotFound, ValidationError
from learnhub.observability.logging import get_logger

log = get_logger(__name__)

_UPDATABLE = frozenset({"title", "description"})


def _clean_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title must be a non-empty string")
    if len(title.strip()) > 255:
        raise ValidationError("Title must be at most 255 characters")
    return title.strip()


def _clean_description(description: Any) -> str | None:
    if description is None:
        return None
    if not isinstance(description, str):
        raise ValidationError("Description must be a string")
    if len(description) > 10_000:
        raise ValidationError("Description must be at most 10000 characters")
    return description


class CourseService:
    def __init__(self, *, uow: UnitOfWork) -> None:
        self._uow = uow

    async def create(
        self, identity: Identity, *, title: str, description: str | None = None
    ) -> Course:
        authorize(identity, Action.create_course)
        clean_title = _clean_title(title)

        async def work(session: AsyncSession) -> Course:
            # Owner must still exist; tokens outlive deleted accounts.
            if await UserRepo(session).get(identity.subject) is None:
                raise AuthenticationError()
            return await CourseRepo(session).create(
                title=clean_title, description=description, instructor_id=identity.subject
            )

        course = await self._uow.run(work)
        log.info("course_created", course_id=str(course.id), instructor_id=str(identity.subject))
        return course

    async def list_all(self) -> list[Course]:
        authorize(None, Action.read_course)

        async def work(session: AsyncSession) -> list[Course]:
            return await CourseRepo(session).list_all()

        return await self._uow.run(work)

    async def get(self, course_id: uuid.UUID) -> Course:
        authorize(None, Action.read_course)

        async def work(session: AsyncSession) -> Course:
            course = await CourseRepo(session).get(course_id)
            if course is None:
                raise NotFound("Course not found")
            return course

        return await self._uow.run(work)

    async def update(
        self, identity: Identity, course_id: uuid.UUID, changes: Mapping[str, Any]
    ) -> Course:
        """
        Apply a partial update. Keys absent from `changes` are left untouched;
        an explicit `description: None` clears the description.
        """

        async def work(session: AsyncSession) -> Course:
            courses = CourseRepo(session)
            course = await courses.get_for_update(course_id)
            if course is None:
                raise NotFound("Course not found")
            # Non-owners learn nothing about body validity: 403 comes first.
            authorize(identity, Action.update_course, course)
            unknown = set(changes) - _UPDATABLE
            if unknown:
                raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
            title = _clean_title(changes["title"]) if "title" in changes else None
            description = _clean_description(changes.get("description"))
            try:
                return await courses.update(
                    course,
                    title=title,
                    description=description,
                    set_description="description" in changes,
                )
            except StaleDataError as e:
                # Deleted by a concurrent transaction after the ownership check.
                raise NotFound("Course not found") from e

        course = await self._uow.run(work)
        log.info("course_updated", course_id=str(course_id), actor=str(identity.subject))
        return course

    async def delete(self, identity: Identity, course_id: uuid.UUID) -> None:
        async def work(session: AsyncSession) -> None:
            courses = CourseRepo(session)
            course = await courses.get_for_update(course_id)
            if course is None:
                raise NotFound("Course not found")
            authorize(identity, Action.delete_course, course)
            if await courses.delete(course_id) != 1:
                raise NotFound("Course not found")

        await self._uow.run(work)
        log.info("course_deleted", course_id=str(course_id), actor=str(identity.subject))


# --- Module Notes -----------------------------------------------------------
# The not-found check precedes authorization, so a non-owner learns that a course
# id exists (public reads expose it anyway) but can never modify it.
