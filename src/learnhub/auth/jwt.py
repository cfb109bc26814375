"""
learnhub.auth.jwt

JWT issuing and verification helpers.

Responsibilities:
- Issue signed access tokens carrying subject, role and username snapshots.
- Verify tokens (signature, issuer, exp/iat with a small leeway) into an `Identity`.
- Classify every rejection as a `TokenVerificationError` subclass.

Note:
- HS256 with a key shared out-of-band by all services. Anyone holding the key can
  mint arbitrary identities, and no token can be invalidated before it expires.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import ExpiredSignatureError, InvalidSignatureError, InvalidTokenError

from learnhub.auth.models import Identity, Role

_REQUIRED_CLAIMS = ["exp", "iat", "iss", "sub", "role", "username"]


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer are enforced during decoding; leeway only widens exp/iat checks.
    alg: str
    issuer: str
    secret: str
    ttl: timedelta = timedelta(hours=1)
    leeway: timedelta = timedelta(seconds=10)


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    expires_at: datetime


class TokenVerificationError(Exception):
    reason = "invalid"


class InvalidSignature(TokenVerificationError):
    reason = "invalid_signature"


class TokenExpired(TokenVerificationError):
    reason = "expired"


class MalformedToken(TokenVerificationError):
    reason = "malformed"


def issue_token(
    *,
    cfg: JwtConfig,
    subject: uuid.UUID,
    role: Role,
    username: str,
    now: datetime | None = None,
) -> IssuedToken:
    issued_at = (now or datetime.now(tz=UTC)).replace(microsecond=0)
    expires_at = issued_at + cfg.ttl
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "sub": str(subject),
        "role": role.value,
        "username": username,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    token = jwt.encode(payload, cfg.secret, algorithm=cfg.alg)
    return IssuedToken(token=token, expires_at=expires_at)


def verify_token(*, cfg: JwtConfig, token: str | None) -> Identity:
    """
    Pure function: no I/O, no shared state. Raises on any defect; never returns a
    partial or default identity.
    """

    if not token:
        raise MalformedToken("missing token")
    try:
        payload = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            leeway=cfg.leeway,
            options={"require": _REQUIRED_CLAIMS},
        )
    except ExpiredSignatureError as e:
        raise TokenExpired(str(e)) from e
    except InvalidSignatureError as e:
        raise InvalidSignature(str(e)) from e
    except InvalidTokenError as e:
        raise MalformedToken(str(e)) from e

    identity = _identity_from_claims(payload)
    if identity.issued_at > datetime.now(tz=UTC) + cfg.leeway:
        raise MalformedToken("token issued in the future")
    return identity


def _identity_from_claims(payload: dict[str, Any]) -> Identity:
    try:
        subject = uuid.UUID(str(payload["sub"]))
        role = Role(payload["role"])
        issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=UTC)
        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
    except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
        raise MalformedToken(f"invalid claims: {e}") from e

    username = payload["username"]
    if not isinstance(username, str) or not username:
        raise MalformedToken("invalid claims: username")

    return Identity(
        subject=subject,
        role=role,
        username=username,
        issued_at=issued_at,
        expires_at=expires_at,
    )


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `services.identity` (login); verification by
# `auth.deps.get_identity` in every service.
