"""
learnhub.api.routers.courses

Course catalog endpoints.

Responsibilities:
- Public catalog reads.
- Authenticated create/update/delete; role and ownership rules are enforced by
  `CourseService` inside the write transaction.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from learnhub.api.deps import course_service
from learnhub.auth.deps import get_identity
from learnhub.auth.models import Identity
from learnhub.services.courses import CourseService

router = APIRouter(prefix="/courses", tags=["courses"])


class CourseCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10_000)


class CourseUpdateRequest(BaseModel):
    # Unknown fields and value rules are checked by `CourseService.update` after the
    # ownership check, so a non-owner always gets 403.
    model_config = ConfigDict(extra="allow")

    title: str | None = None
    description: str | None = None


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str | None
    instructor_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


@router.post("", response_model=CourseResponse, status_code=HTTP_201_CREATED)
async def create_course(
    body: CourseCreateRequest,
    identity: Identity = Depends(get_identity),
    svc: CourseService = Depends(course_service),
) -> CourseResponse:
    course = await svc.create(identity, title=body.title, description=body.description)
    return CourseResponse.model_validate(course)


@router.get("", response_model=list[CourseResponse])
async def list_courses(svc: CourseService = Depends(course_service)) -> list[CourseResponse]:
    return [CourseResponse.model_validate(c) for c in await svc.list_all()]


@router.get("/{course_id}", response_model=CourseResponse)
async def get_course(
    course_id: uuid.UUID,
    svc: CourseService = Depends(course_service),
) -> CourseResponse:
    return CourseResponse.model_validate(await svc.get(course_id))


@router.put("/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: uuid.UUID,
    body: CourseUpdateRequest,
    identity: Identity = Depends(get_identity),
    svc: CourseService = Depends(course_service),
) -> CourseResponse:
    # Only fields present in the request body are applied.
    changes = body.model_dump(exclude_unset=True)
    course = await svc.update(identity, course_id, changes)
    return CourseResponse.model_validate(course)


@router.delete("/{course_id}", status_code=HTTP_204_NO_CONTENT, response_class=Response)
async def delete_course(
    course_id: uuid.UUID,
    identity: Identity = Depends(get_identity),
    svc: CourseService = Depends(course_service),
) -> Response:
    await svc.delete(identity, course_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


# --- Module Notes -----------------------------------------------------------
# Authentication (401) is resolved by the `get_identity` dependency before the
# handler runs; authorization (403) needs the stored course and happens later.
