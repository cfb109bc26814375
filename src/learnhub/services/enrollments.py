"""
learnhub.services.enrollments

Enrollment service.

Responsibilities:
- Enroll the caller in an existing course (non-idempotent: a repeat is a Conflict).
- List the caller's own enrolled courses; the scope is always the token subject.
"""

from __future__ import annotations

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.auth.models import Identity
from learnhub.auth.policy import Action, authorize, enrollment_scope
from learnhub.db.models import Enrollment
from learnhub.db.repositories.courses import CourseRepo
from learnhub.db.repositories.enrollments import EnrolledCourse, EnrollmentRepo
from learnhub.db.repositories.users import UserRepo
from learnhub.db.unit_of_work import UnitOfWork
from learnhub.errors import AuthenticationError, Conflict, NotFound
from learnhub.observability.logging import get_logger

log = get_logger(__name__)


class EnrollmentService:
    def __init__(self, *, uow: UnitOfWork) -> None:
        self._uow = uow

    async def enroll(self, identity: Identity, course_id: uuid.UUID) -> Enrollment:
        authorize(identity, Action.create_enrollment)
        user_id = enrollment_scope(identity)

        async def work(session: AsyncSession) -> Enrollment:
            if await CourseRepo(session).get_for_update(course_id) is None:
                raise NotFound("Course not found")
            if await UserRepo(session).get(user_id) is None:
                raise AuthenticationError()
            try:
                return await EnrollmentRepo(session).create(user_id=user_id, course_id=course_id)
            except IntegrityError as e:
                raise Conflict("User is already enrolled in this course") from e

        enrollment = await self._uow.run(work)
        log.info("enrollment_created", user_id=str(user_id), course_id=str(course_id))
        return enrollment

    async def my_courses(self, identity: Identity) -> list[EnrolledCourse]:
        authorize(identity, Action.list_own_enrollments)
        user_id = enrollment_scope(identity)

        async def work(session: AsyncSession) -> list[EnrolledCourse]:
            return await EnrollmentRepo(session).list_for_user(user_id)

        return await self._uow.run(work)


# --- Module Notes -----------------------------------------------------------
# Duplicate enrollments surface as 409 on purpose so client re-submission bugs are
# visible; the composite primary key makes this safe under concurrent requests.
