"""
learnhub.services.identity

Identity service: registration, login (token issuing) and whoami.

Responsibilities:
- Validate and register users with an Argon2 password digest and role `student`.
- Authenticate credentials with timing equalization and mint signed tokens.
- Resolve a raw token to an `Identity` through the shared verifier, without the store.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.auth.jwt import (
    IssuedToken,
    JwtConfig,
    TokenVerificationError,
    issue_token,
    verify_token,
)
from learnhub.auth.models import Identity
from learnhub.auth.passwords import burn_verification, hash_password, verify_password
from learnhub.db.models import User
from learnhub.db.repositories.users import UserRepo
from learnhub.db.unit_of_work import UnitOfWork
from learnhub.errors import AuthenticationError, Conflict, ValidationError
from learnhub.observability.logging import get_logger

log = get_logger(__name__)

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{3,64}$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_MIN_PASSWORD = 1
_MAX_PASSWORD = 128
_MAX_NAME = 255


@dataclass(frozen=True, slots=True)
class Registration:
    username: str
    password: str
    email: str
    first_name: str
    last_name: str

    def normalized(self) -> Registration:
        username = self.username.strip()
        email = self.email.strip().lower()
        first_name = self.first_name.strip()
        last_name = self.last_name.strip()

        if not _USERNAME_RE.match(username):
            raise ValidationError("Username must be 3-64 letters, digits, '.', '_' or '-'")
        if len(email) > 255 or not _EMAIL_RE.match(email):
            raise ValidationError("Email address is malformed")
        if not first_name or not last_name:
            raise ValidationError("First and last name are required")
        if len(first_name) > _MAX_NAME or len(last_name) > _MAX_NAME:
            raise ValidationError("Names must be at most 255 characters")
        if not _MIN_PASSWORD <= len(self.password) <= _MAX_PASSWORD:
            raise ValidationError("Password must be 1-128 characters")

        return Registration(
            username=username,
            password=self.password,
            email=email,
            first_name=first_name,
            last_name=last_name,
        )


class IdentityService:
    def __init__(self, *, uow: UnitOfWork, jwt_cfg: JwtConfig) -> None:
        self._uow = uow
        self._jwt_cfg = jwt_cfg

    async def register(self, registration: Registration) -> User:
        reg = registration.normalized()
        # Argon2 is CPU and memory bound; keep it off the event loop.
        password_hash = await asyncio.to_thread(hash_password, reg.password)

        async def work(session: AsyncSession) -> User:
            users = UserRepo(session)
            if await users.get_by_username(reg.username) is not None:
                raise Conflict("Username already exists")
            if await users.get_by_email(reg.email) is not None:
                raise Conflict("Email already exists")
            try:
                return await users.create(
                    username=reg.username,
                    password_hash=password_hash,
                    email=reg.email,
                    first_name=reg.first_name,
                    last_name=reg.last_name,
                )
            except IntegrityError as e:
                # Lost a race with a concurrent registration of the same username/email.
                raise Conflict("Username or email already exists") from e

        user = await self._uow.run(work)
        log.info("user_registered", user_id=str(user.id))
        return user

    async def login(self, *, username: str, password: str) -> IssuedToken:
        async def work(session: AsyncSession) -> User | None:
            return await UserRepo(session).get_by_username(username.strip())

        user = await self._uow.run(work)
        if user is None:
            await asyncio.to_thread(burn_verification, password)
            log.info("login_failed")
            raise AuthenticationError()
        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            log.info("login_failed")
            raise AuthenticationError()

        issued = issue_token(
            cfg=self._jwt_cfg, subject=user.id, role=user.role, username=user.username
        )
        log.info("login_succeeded", user_id=str(user.id), role=user.role.value)
        return issued

    def whoami(self, token: str | None) -> Identity:
        # Claims are trusted until expiry; the store is not consulted.
        try:
            return verify_token(cfg=self._jwt_cfg, token=token)
        except TokenVerificationError as e:
            log.info("token_rejected", reason=e.reason)
            raise AuthenticationError() from e


# --- Module Notes -----------------------------------------------------------
# There is deliberately no operation that changes a user's role; promotion to
# instructor/admin is left to an administrative process outside these services.
