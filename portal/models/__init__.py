from portal.models.assignment import Assignment, AssignmentStatus
from portal.models.event import Event
from portal.models.message import Message
from portal.models.notice import Notice
from portal.models.registry import ENTITIES, EntityKind
from portal.models.resource import Resource
from portal.models.schedule import Schedule, ScheduleStatus, Weekday
from portal.models.session import UserSession
from portal.models.student_id import StudentIdEntry
from portal.models.submission import Submission, SubmissionStatus
from portal.models.todo import Todo
from portal.models.user import User, UserRole

__all__ = [
    "Assignment", "AssignmentStatus", "Event", "Message", "Notice", "ENTITIES", "EntityKind",
    "Resource", "Schedule", "ScheduleStatus", "Weekday", "UserSession", "StudentIdEntry",
    "Submission", "SubmissionStatus", "Todo", "User", "UserRole",
]
