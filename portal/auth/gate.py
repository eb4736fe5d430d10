"""Authorization gate.

Every protected route declares the (entity kind, operation) it performs and
the gate looks the required role up in ``PERMISSIONS``. Pairs missing from the
table need the admin role.
"""
import logging
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from fastapi import Depends, Request
from fastapi.dependencies.models import Dependant
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.concurrency import run_in_threadpool

from portal.auth.auth_handler import get_current_user, user_from_request
from portal.errors import AuthorizationError
from portal.models import EntityKind
from portal.schemas.user_schema import UserResponse

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    list = "list"
    read = "read"
    create = "create"
    update = "update"
    delete = "delete"


class RequiredRole(str, Enum):
    authenticated = "authenticated"
    student = "student"
    admin = "admin"


REFERENCE_KINDS = (
    EntityKind.assignments,
    EntityKind.resources,
    EntityKind.notices,
    EntityKind.schedule,
    EntityKind.events,
)


def _build_permissions() -> Dict[Tuple[EntityKind, Operation], RequiredRole]:
    table = {}
    for kind in REFERENCE_KINDS:
        table[(kind, Operation.list)] = RequiredRole.authenticated
        table[(kind, Operation.read)] = RequiredRole.authenticated
        table[(kind, Operation.create)] = RequiredRole.admin
        table[(kind, Operation.update)] = RequiredRole.admin
        table[(kind, Operation.delete)] = RequiredRole.admin
    # personally owned data; ownership is checked against the record
    for operation in Operation:
        table[(EntityKind.todos, operation)] = RequiredRole.authenticated
    table[(EntityKind.messages, Operation.list)] = RequiredRole.authenticated
    table[(EntityKind.messages, Operation.create)] = RequiredRole.authenticated
    table[(EntityKind.messages, Operation.update)] = RequiredRole.authenticated
    # students see only their own submissions
    table[(EntityKind.submissions, Operation.list)] = RequiredRole.authenticated
    table[(EntityKind.submissions, Operation.create)] = RequiredRole.student
    table[(EntityKind.submissions, Operation.update)] = RequiredRole.admin
    for operation in Operation:
        table[(EntityKind.student_ids, operation)] = RequiredRole.admin
    return table


PERMISSIONS = _build_permissions()


def required_role(kind: EntityKind, operation: Operation) -> RequiredRole:
    return PERMISSIONS.get((kind, operation), RequiredRole.admin)


def check_access(identity: UserResponse, kind: EntityKind, operation: Operation) -> None:
    required = required_role(kind, operation)
    if required is RequiredRole.authenticated:
        return
    if identity.role.value != required.value:
        logger.warning(f"User {identity.username} ({identity.role.value}) denied {operation.value} on {kind.value}")
        raise AuthorizationError()


def check_owner(identity: UserResponse, owner_id: int, kind: EntityKind) -> None:
    if identity.id != owner_id:
        logger.warning(f"User {identity.username} denied access to another user's {kind.value}")
        raise AuthorizationError(f"You do not own this {kind.value.rstrip('s')}")


def require(kind: EntityKind, operation: Operation):
    """Route dependency: authenticate, then apply the gate. Returns the caller."""

    def dependency(current_user: UserResponse = Depends(get_current_user)) -> UserResponse:
        check_access(current_user, kind, operation)
        return current_user

    dependency.gate = (kind, operation)
    return dependency


def _route_gate(dependant: Dependant) -> Optional[Callable[[Request], None]]:
    for sub in dependant.dependencies:
        if sub.call is get_current_user:
            return user_from_request
        gate = getattr(sub.call, "gate", None)
        if gate is not None:
            kind, operation = gate
            return lambda request: check_access(user_from_request(request), kind, operation)
    return None


class GatedRoute(APIRoute):
    """Route on which a missing session or a denied role outranks a bad request body.

    FastAPI decodes the JSON body before it solves dependencies, so without this a
    malformed body would be answered with 400 ahead of the 401 or 403.
    """

    def get_route_handler(self):
        handler = super().get_route_handler()
        gate = _route_gate(self.dependant)
        if gate is None:
            return handler

        async def gated_handler(request: Request):
            try:
                return await handler(request)
            except RequestValidationError:
                await run_in_threadpool(gate, request)
                raise

        return gated_handler
