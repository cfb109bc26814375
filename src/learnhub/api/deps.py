"""
learnhub.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose the process-wide settings and store handles stashed on app.state.
- Build request-scoped service objects from those handles.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from learnhub.auth.deps import jwt_config
from learnhub.auth.jwt import JwtConfig
from learnhub.db.unit_of_work import UnitOfWork
from learnhub.services.courses import CourseService
from learnhub.services.enrollments import EnrollmentService
from learnhub.services.identity import IdentityService
from learnhub.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings are constructed once in `learnhub.api.app.create_app`, never per request.
    return request.app.state.settings  # type: ignore[no-any-return]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created in the app lifespan.
    return request.app.state.sessionmaker  # type: ignore[no-any-return]


def unit_of_work(request: Request) -> UnitOfWork:
    return request.app.state.unit_of_work  # type: ignore[no-any-return]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Plain request-scoped session for probes; services use the unit of work instead.
    async with session_factory() as session:
        yield session


def identity_service(
    uow: UnitOfWork = Depends(unit_of_work),
    cfg: JwtConfig = Depends(jwt_config),
) -> IdentityService:
    return IdentityService(uow=uow, jwt_cfg=cfg)


def course_service(uow: UnitOfWork = Depends(unit_of_work)) -> CourseService:
    return CourseService(uow=uow)


def enrollment_service(uow: UnitOfWork = Depends(unit_of_work)) -> EnrollmentService:
    return EnrollmentService(uow=uow)
