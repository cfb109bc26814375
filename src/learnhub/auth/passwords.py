"""Password hashing with Argon2id via passlib."""

from __future__ import annotations

from passlib.context import CryptContext
from passlib.exc import UnknownHashError

_password_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return _password_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    # argon2 verification compares digests in constant time.
    try:
        return _password_context.verify(password, hashed)
    except (UnknownHashError, ValueError):
        return False


# Verified against when the username is unknown so a miss costs the same as a
# wrong password.
_DUMMY_HASH = hash_password("learnhub-timing-equalizer")


def burn_verification(password: str) -> None:
    verify_password(password, _DUMMY_HASH)
