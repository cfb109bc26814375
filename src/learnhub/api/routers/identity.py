"""
learnhub.api.routers.identity

Identity service endpoints.

Responsibilities:
- Register users (`POST /register`).
- Exchange credentials for a bearer token (`POST /login`).
- Describe the caller from their token alone (`GET /me`).
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict, Field
from starlette.status import HTTP_201_CREATED

from learnhub.api.deps import identity_service
from learnhub.auth.models import Role
from learnhub.services.identity import IdentityService, Registration

router = APIRouter(tags=["identity"])

_bearer = HTTPBearer(auto_error=False)


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)
    email: str = Field(min_length=1, max_length=255)
    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    first_name: str
    last_name: str
    role: Role
    created_at: datetime


class LoginRequest(BaseModel):
    # No length bounds: a username that cannot exist must fail as 401, not 422.
    username: str
    password: str


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime


class MeResponse(BaseModel):
    id: uuid.UUID
    username: str
    role: Role
    issued_at: datetime
    expires_at: datetime


@router.post("/register", response_model=UserResponse, status_code=HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    svc: IdentityService = Depends(identity_service),
) -> UserResponse:
    user = await svc.register(
        Registration(
            username=body.username,
            password=body.password,
            email=body.email,
            first_name=body.first_name,
            last_name=body.last_name,
        )
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    svc: IdentityService = Depends(identity_service),
) -> TokenResponse:
    issued = await svc.login(username=body.username, password=body.password)
    return TokenResponse(token=issued.token, expires_at=issued.expires_at)


@router.get("/me", response_model=MeResponse)
async def me(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    svc: IdentityService = Depends(identity_service),
) -> MeResponse:
    identity = svc.whoami(creds.credentials if creds is not None else None)
    return MeResponse(
        id=identity.subject,
        username=identity.username,
        role=identity.role,
        issued_at=identity.issued_at,
        expires_at=identity.expires_at,
    )
