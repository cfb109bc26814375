"""
learnhub.auth.policy

Static role-and-ownership authorization rules.

Responsibilities:
- Define the protected actions of the course and enrollment services.
- Decide whether a verified identity may perform an action, given the target
  resource when the rule depends on ownership.
- Raise AuthorizationError (403) for "authenticated but not allowed", distinct
  from AuthenticationError (401) for "not authenticated".
"""

from __future__ import annotations

import enum
import uuid
from typing import Protocol, assert_never

from learnhub.auth.models import Identity, Role
from learnhub.errors import AuthenticationError, AuthorizationError


class Action(enum.StrEnum):
    create_course = "create_course"
    read_course = "read_course"
    update_course = "update_course"
    delete_course = "delete_course"
    create_enrollment = "create_enrollment"
    list_own_enrollments = "list_own_enrollments"


class OwnedResource(Protocol):
    instructor_id: uuid.UUID


def requires_authentication(action: Action) -> bool:
    match action:
        case Action.read_course:
            return False
        case (
            Action.create_course
            | Action.update_course
            | Action.delete_course
            | Action.create_enrollment
            | Action.list_own_enrollments
        ):
            return True
        case _:
            assert_never(action)


def can(identity: Identity | None, action: Action, resource: OwnedResource | None = None) -> bool:
    if identity is None:
        return not requires_authentication(action)

    match action:
        case Action.read_course | Action.create_enrollment | Action.list_own_enrollments:
            return True
        case Action.create_course:
            return _may_author_courses(identity.role)
        case Action.update_course | Action.delete_course:
            if resource is None:
                # Ownership rules are only meaningful against a freshly fetched target.
                raise ValueError(f"{action} requires the target resource")
            return _may_manage(identity, resource)
        case _:
            assert_never(action)


def authorize(
    identity: Identity | None, action: Action, resource: OwnedResource | None = None
) -> None:
    if identity is None and requires_authentication(action):
        raise AuthenticationError()
    if not can(identity, action, resource):
        raise AuthorizationError(f"Not allowed to {action.value.replace('_', ' ')}")


def enrollment_scope(identity: Identity) -> uuid.UUID:
    # Enrollment listings are always scoped to the caller; no user id is accepted from input.
    return identity.subject


def _may_author_courses(role: Role) -> bool:
    match role:
        case Role.instructor | Role.admin:
            return True
        case Role.student:
            return False
        case _:
            assert_never(role)


def _may_manage(identity: Identity, resource: OwnedResource) -> bool:
    match identity.role:
        case Role.admin:
            return True
        case Role.instructor:
            return identity.subject == resource.instructor_id
        case Role.student:
            return False
        case _:
            assert_never(identity.role)


# --- Module Notes -----------------------------------------------------------
# Adding a Role or Action makes the `assert_never` branches fail type checking
# until every rule above has been revisited.
