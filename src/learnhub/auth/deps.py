"""
learnhub.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Build the verifier configuration from settings once per process.
- Convert a bearer token into a typed `Identity`, failing closed.
"""

from __future__ import annotations

from datetime import timedelta

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from learnhub.auth.jwt import JwtConfig, TokenVerificationError, verify_token
from learnhub.auth.models import Identity
from learnhub.errors import AuthenticationError
from learnhub.observability.logging import get_logger
from learnhub.settings import Settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def jwt_config_from_settings(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        secret=settings.jwt_secret,
        ttl=timedelta(minutes=settings.token_ttl_minutes),
        leeway=timedelta(seconds=settings.clock_skew_seconds),
    )


def jwt_config(request: Request) -> JwtConfig:
    # Built once in `learnhub.api.app.create_app`.
    return request.app.state.jwt_config  # type: ignore[no-any-return]


def get_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    cfg: JwtConfig = Depends(jwt_config),
) -> Identity:
    # A missing header or a non-bearer scheme is treated exactly like a bad token.
    token = creds.credentials if creds is not None else None
    try:
        return verify_token(cfg=cfg, token=token)
    except TokenVerificationError as e:
        log.info("token_rejected", reason=e.reason)
        raise AuthenticationError() from e


# --- Module Notes -----------------------------------------------------------
# Authorization is not a dependency here: ownership rules need the target row,
# so services call `auth.policy.authorize` inside their unit of work.
