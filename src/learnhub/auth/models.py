"""
learnhub.auth.models

Auth domain models.

Responsibilities:
- Define the closed set of user roles.
- Define the authenticated identity type (`Identity`) injected into endpoints.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from datetime import datetime


class Role(enum.StrEnum):
    # Values are persisted and embedded in tokens; treat as stable API contract.
    student = "student"
    instructor = "instructor"
    admin = "admin"


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Authenticated caller identity, decoded from a verified token.

    `role` and `username` are snapshots taken at issuance and are trusted until
    `expires_at`; they are not re-read from the store on each request.
    """

    subject: uuid.UUID
    role: Role
    username: str
    issued_at: datetime
    expires_at: datetime


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is used across API, services and the policy engine.
