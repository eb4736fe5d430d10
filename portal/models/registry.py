from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Optional, Type

from sqlmodel import SQLModel

from portal.models.assignment import Assignment, AssignmentCreate, AssignmentUpdate
from portal.models.event import Event, EventCreate, EventUpdate
from portal.models.message import Message, MessageCreate, MessageUpdate
from portal.models.notice import Notice, NoticeCreate, NoticeUpdate
from portal.models.resource import Resource, ResourceCreate, ResourceUpdate
from portal.models.schedule import Schedule, ScheduleCreate, ScheduleUpdate
from portal.models.student_id import StudentIdCreate, StudentIdEntry, StudentIdUpdate
from portal.models.submission import Submission, SubmissionCreate, SubmissionUpdate
from portal.models.todo import Todo, TodoCreate, TodoUpdate
from portal.models.user import User, UserCreate, UserUpdate


class EntityKind(str, Enum):
    users = "users"
    assignments = "assignments"
    submissions = "submissions"
    resources = "resources"
    notices = "notices"
    schedule = "schedule"
    todos = "todos"
    events = "events"
    messages = "messages"
    student_ids = "student_ids"


@dataclass(frozen=True)
class EntitySpec:
    model: Type[SQLModel]
    create_schema: Type[SQLModel]
    update_schema: Type[SQLModel]
    # Natural timestamp column, listed newest-first; None keeps insertion order.
    order_by: Optional[str]
    filterable: FrozenSet[str]
    unique: FrozenSet[str] = frozenset()
    immutable: FrozenSet[str] = field(default_factory=lambda: frozenset({"id"}))


ENTITIES: Dict[EntityKind, EntitySpec] = {
    EntityKind.users: EntitySpec(
        User, UserCreate, UserUpdate, None,
        frozenset({"role", "username"}),
        unique=frozenset({"username"}),
        immutable=frozenset({"id", "username", "role"}),
    ),
    EntityKind.assignments: EntitySpec(
        Assignment, AssignmentCreate, AssignmentUpdate, "posted_date",
        frozenset({"status", "course_code"}),
    ),
    EntityKind.submissions: EntitySpec(
        Submission, SubmissionCreate, SubmissionUpdate, "submission_date",
        frozenset({"assignment_id", "student_id"}),
    ),
    EntityKind.resources: EntitySpec(
        Resource, ResourceCreate, ResourceUpdate, "upload_date",
        frozenset({"category", "course_code"}),
    ),
    EntityKind.notices: EntitySpec(
        Notice, NoticeCreate, NoticeUpdate, "posted_date",
        frozenset({"category"}),
    ),
    EntityKind.schedule: EntitySpec(
        Schedule, ScheduleCreate, ScheduleUpdate, None,
        frozenset({"day", "status"}),
    ),
    EntityKind.todos: EntitySpec(
        Todo, TodoCreate, TodoUpdate, "created_at",
        frozenset({"user_id"}),
    ),
    EntityKind.events: EntitySpec(
        Event, EventCreate, EventUpdate, "date",
        frozenset({"category"}),
    ),
    EntityKind.messages: EntitySpec(
        Message, MessageCreate, MessageUpdate, "timestamp",
        frozenset({"sender_id", "receiver_id"}),
    ),
    EntityKind.student_ids: EntitySpec(
        StudentIdEntry, StudentIdCreate, StudentIdUpdate, None,
        frozenset({"student_id", "assigned"}),
        unique=frozenset({"student_id"}),
    ),
}
