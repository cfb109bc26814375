"""
learnhub.api.routers.enrollments

Enrollment endpoints.

Responsibilities:
- Enroll the caller in a course (`POST /enrollments`).
- List the caller's enrolled courses (`GET /enrollments/my-courses`).
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from starlette.status import HTTP_201_CREATED

from learnhub.api.deps import enrollment_service
from learnhub.auth.deps import get_identity
from learnhub.auth.models import Identity
from learnhub.services.enrollments import EnrollmentService

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


class EnrollmentRequest(BaseModel):
    course_id: uuid.UUID


class EnrollmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: uuid.UUID
    course_id: uuid.UUID
    enrollment_date: datetime


class EnrolledCourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_id: uuid.UUID
    title: str
    description: str | None
    enrollment_date: datetime


@router.post("", response_model=EnrollmentResponse, status_code=HTTP_201_CREATED)
async def enroll(
    body: EnrollmentRequest,
    identity: Identity = Depends(get_identity),
    svc: EnrollmentService = Depends(enrollment_service),
) -> EnrollmentResponse:
    # The enrolled user is always the caller; the body only names the course.
    enrollment = await svc.enroll(identity, body.course_id)
    return EnrollmentResponse.model_validate(enrollment)


@router.get("/my-courses", response_model=list[EnrolledCourseResponse])
async def my_courses(
    identity: Identity = Depends(get_identity),
    svc: EnrollmentService = Depends(enrollment_service),
) -> list[EnrolledCourseResponse]:
    return [EnrolledCourseResponse.model_validate(e) for e in await svc.my_courses(identity)]
