"""
learnhub.errors

Domain error taxonomy shared by every service.

Responsibilities:
- Give each failure class a stable HTTP status and machine-readable code.
- Keep services free of HTTP types; the API layer renders these uniformly.
"""

from __future__ import annotations


class LearnHubError(Exception):
    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LearnHubError):
    status_code = 422
    code = "validation_error"
    default_message = "Request validation failed."


class AuthenticationError(LearnHubError):
    # One message for every cause so callers cannot probe which usernames exist.
    status_code = 401
    code = "unauthorized"
    default_message = "Authentication failed."

    def __init__(self) -> None:
        super().__init__(self.default_message)


class AuthorizationError(LearnHubError):
    status_code = 403
    code = "forbidden"
    default_message = "You are not allowed to perform this action."


class NotFound(LearnHubError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found."


class Conflict(LearnHubError):
    status_code = 409
    code = "conflict"
    default_message = "Resource already exists."


class InternalError(LearnHubError):
    status_code = 500
    code = "internal_error"


# --- Module Notes -----------------------------------------------------------
# Token verification failures live in `auth.jwt` (so the verifier stays standalone)
# and are converted to AuthenticationError at the API boundary.
