"""
tests.test_enrollments_api

Enrollment endpoints.
"""

from __future__ import annotations

import uuid

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.auth.models import Role
from learnhub.db.repositories.enrollments import EnrollmentRepo
from tests.conftest import MakeAccount


async def _course_id(client: httpx.AsyncClient, make_account: MakeAccount, title: str) -> str:
    instructor = await make_account(f"lecturer-{title.lower()}", Role.instructor)
    r = await client.post(
        "/courses",
        json={"title": title, "description": f"About {title}"},
        headers=instructor.headers,
    )
    assert r.status_code == 201, r.text
    return r.json()["id"]


@pytest.mark.asyncio
async def test_enroll_creates_enrollment_for_caller(
    client: httpx.AsyncClient, make_account: MakeAccount
) -> None:
    course_id = await _course_id(client, make_account, "Physics")
    student = await make_account("sam")

    r = await client.post("/enrollments", json={"course_id": course_id}, headers=student.headers)

    assert r.status_code == 201
    body = r.json()
    assert body["user_id"] == str(student.id)
    assert body["course_id"] == course_id
    assert "enrollment_date" in body


@pytest.mark.asyncio
async def test_duplicate_enrollment_conflicts_and_keeps_one_row(
    app: FastAPI, client: httpx.AsyncClient, make_account: MakeAccount
) -> None:
    course_id = await _course_id(client, make_account, "Physics")
    student = await make_account("sam")

    body = {"course_id": course_id}
    first = await client.post("/enrollments", json=body, headers=student.headers)
    second = await client.post("/enrollments", json=body, headers=student.headers)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "conflict"

    async def work(session: AsyncSession) -> int:
        return await EnrollmentRepo(session).count(
            user_id=student.id, course_id=uuid.UUID(course_id)
        )

    assert await app.state.unit_of_work.run(work) == 1


@pytest.mark.asyncio
async def test_enroll_in_unknown_course_is_not_found(
    client: httpx.AsyncClient, make_account: MakeAccount
) -> None:
    student = await make_account("sam")

    r = await client.post(
        "/enrollments", json={"course_id": str(uuid.uuid4())}, headers=student.headers
    )

    assert r.status_code == 404


@pytest.mark.asyncio
async def test_enrollment_endpoints_require_authentication(
    client: httpx.AsyncClient, make_account: MakeAccount
) -> None:
    course_id = await _course_id(client, make_account, "Physics")

    assert (await client.post("/enrollments", json={"course_id": course_id})).status_code == 401
    assert (await client.get("/enrollments/my-courses")).status_code == 401


@pytest.mark.asyncio
async def test_enroll_rejects_malformed_course_id(
    client: httpx.AsyncClient, make_account: MakeAccount
) -> None:
    student = await make_account("sam")

    r = await client.post("/enrollments", json={"course_id": "42"}, headers=student.headers)

    assert r.status_code == 422


@pytest.mark.asyncio
async def test_my_courses_lists_only_callers_enrollments(
    client: httpx.AsyncClient, make_account: MakeAccount
) -> None:
    physics = await _course_id(client, make_account, "Physics")
    chemistry = await _course_id(client, make_account, "Chemistry")
    sam = await make_account("sam")
    kim = await make_account("kim")

    for course_id in (physics, chemistry):
        r = await client.post("/enrollments", json={"course_id": course_id}, headers=sam.headers)
        assert r.status_code == 201
    r = await client.post("/enrollments", json={"course_id": chemistry}, headers=kim.headers)
    assert r.status_code == 201

    r = await client.get("/enrollments/my-courses", headers=sam.headers)
    assert r.status_code == 200
    assert {c["course_id"] for c in r.json()} == {physics, chemistry}
    assert {c["title"] for c in r.json()} == {"Physics", "Chemistry"}

    # A caller-supplied user id never widens the scope.
    r = await client.get(
        "/enrollments/my-courses", params={"user_id": str(sam.id)}, headers=kim.headers
    )
    assert r.status_code == 200
    assert [c["course_id"] for c in r.json()] == [chemistry]
    assert r.json()[0]["description"] == "About Chemistry"


@pytest.mark.asyncio
async def test_my_courses_is_empty_without_enrollments(
    client: httpx.AsyncClient, make_account: MakeAccount
) -> None:
    student = await make_account("sam")

    r = await client.get("/enrollments/my-courses", headers=student.headers)

    assert r.status_code == 200
    assert r.json() == []
