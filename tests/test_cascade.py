"""
tests.test_cascade

Delete cascades encoded in the schema foreign keys.
"""

from __future__ import annotations

import uuid

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.auth.models import Role
from learnhub.db.repositories.courses import CourseRepo
from learnhub.db.repositories.enrollments import EnrollmentRepo
from learnhub.db.repositories.users import UserRepo
from tests.conftest import Account, MakeAccount


async def _create_course(client: httpx.AsyncClient, owner: Account, title: str) -> uuid.UUID:
    r = await client.post("/courses", json={"title": title}, headers=owner.headers)
    assert r.status_code == 201, r.text
    return uuid.UUID(r.json()["id"])


async def _enroll(client: httpx.AsyncClient, who: Account, course_id: uuid.UUID) -> None:
    r = await client.post("/enrollments", json={"course_id": str(course_id)}, headers=who.headers)
    assert r.status_code == 201, r.text


@pytest.mark.asyncio
async def test_deleting_user_removes_owned_courses_and_enrollments(
    app: FastAPI, client: httpx.AsyncClient, make_account: MakeAccount
) -> None:
    owner = await make_account("owner", Role.instructor)
    other = await make_account("other", Role.instructor)
    student = await make_account("sam")
    owned = await _create_course(client, owner, "Owned")
    kept = await _create_course(client, other, "Kept")
    await _enroll(client, student, owned)
    await _enroll(client, student, kept)
    # The owner is also enrolled in someone else's course.
    await _enroll(client, owner, kept)

    async def delete_owner(session: AsyncSession) -> int:
        return await UserRepo(session).delete(owner.id)

    assert await app.state.unit_of_work.run(delete_owner) == 1

    async def snapshot(session: AsyncSession) -> tuple[bool, bool, int, int, int]:
        courses = CourseRepo(session)
        enrollments = EnrollmentRepo(session)
        return (
            await courses.get(owned) is None,
            await courses.get(kept) is None,
            await enrollments.count(course_id=owned),
            await enrollments.count(user_id=owner.id),
            await enrollments.count(user_id=student.id),
        )

    owned_gone, kept_gone, owned_rows, owner_rows, student_rows = (
        await app.state.unit_of_work.run(snapshot)
    )
    assert owned_gone
    assert not kept_gone
    assert owned_rows == 0
    assert owner_rows == 0
    assert student_rows == 1


@pytest.mark.asyncio
async def test_deleting_course_removes_only_its_enrollments(
    app: FastAPI, client: httpx.AsyncClient, make_account: MakeAccount
) -> None:
    owner = await make_account("owner", Role.instructor)
    student = await make_account("sam")
    doomed = await _create_course(client, owner, "Doomed")
    kept = await _create_course(client, owner, "Kept")
    await _enroll(client, student, doomed)
    await _enroll(client, student, kept)

    r = await client.delete(f"/courses/{doomed}", headers=owner.headers)
    assert r.status_code == 204

    async def snapshot(session: AsyncSession) -> tuple[int, int, bool, bool]:
        enrollments = EnrollmentRepo(session)
        users = UserRepo(session)
        return (
            await enrollments.count(course_id=doomed),
            await enrollments.count(user_id=student.id),
            await users.get(student.id) is not None,
            await users.get(owner.id) is not None,
        )

    doomed_rows, student_rows, student_exists, owner_exists = (
        await app.state.unit_of_work.run(snapshot)
    )
    assert doomed_rows == 0
    assert student_rows == 1
    assert student_exists
    assert owner_exists

    r = await client.get("/enrollments/my-courses", headers=student.headers)
    assert [c["course_id"] for c in r.json()] == [str(kept)]
