import logging
from typing import List

from portal.auth.auth_handler import get_password_hash
from portal.configs.settings import Settings
from portal.errors import AuthorizationError, PortalError, ValidationError
from portal.models import EntityKind, StudentIdEntry, User, UserRole
from portal.models.student_id import StudentIdCreate, StudentIdUpdate
from portal.schemas.student_schema import StudentIdRequest
from portal.schemas.user_schema import RegisterRequest
from portal.services.entity_service import update_or_404
from portal.services.storage import Storage

logger = logging.getLogger(__name__)


def register_user(storage: Storage, settings: Settings, request: RegisterRequest) -> User:
    if storage.get_user_by_username(request.username):
        raise ValidationError("Username already exists")

    values = {
        "username": request.username,
        "full_name": request.full_name,
        "role": request.role,
        "password": get_password_hash(request.password),
    }
    entry = None
    if request.role is UserRole.admin:
        if not settings.ALLOW_ADMIN_REGISTRATION:
            raise AuthorizationError("Admin registration is disabled")
    else:
        entry = _claimable_student_id(storage, request.student_id)
        values.update(
            student_id=entry.student_id,
            section=entry.section,
            department=entry.department,
            year=entry.year,
            semester=entry.semester,
        )
        # claim before creating the user so two registrations cannot share one roster id
        if storage.update_if(EntityKind.student_ids, entry.id, {"assigned": False}, {"assigned": True}) is None:
            raise ValidationError("Student ID already registered")

    try:
        user = storage.create(EntityKind.users, values)
    except PortalError:
        if entry is not None:
            storage.update(EntityKind.student_ids, entry.id, {"assigned": False})
        raise
    if entry is not None:
        storage.update(EntityKind.student_ids, entry.id, {"user_id": user.id})
    logger.info(f"Registered {user.role.value} {user.username}")
    return user


def _claimable_student_id(storage: Storage, student_id: str | None) -> StudentIdEntry:
    if not student_id:
        raise ValidationError("Student ID is required")
    entries = storage.list(EntityKind.student_ids, student_id=student_id)
    if not entries:
        raise ValidationError("Invalid student ID")
    entry = entries[0]
    if entry.assigned:
        raise ValidationError("Student ID already registered")
    return entry


def create_admin(storage: Storage, username: str, password: str, full_name: str) -> User:
    return storage.create(EntityKind.users, {
        "username": username,
        "full_name": full_name,
        "role": UserRole.admin,
        "password": get_password_hash(password),
    })


def list_student_ids(storage: Storage) -> List[StudentIdEntry]:
    return storage.list(EntityKind.student_ids)


def add_student_id(storage: Storage, request: StudentIdRequest) -> StudentIdEntry:
    entry = storage.create(EntityKind.student_ids, StudentIdCreate(**request.model_dump()))
    logger.info(f"Student ID {entry.student_id} added to roster")
    return entry


def update_student_id(storage: Storage, entry_id: int, update: StudentIdUpdate) -> StudentIdEntry:
    return update_or_404(storage, EntityKind.student_ids, entry_id, update, "Student ID")
