from datetime import date
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

from portal.utils.utils import today


class AssignmentStatus(str, Enum):
    pending = "pending"
    submitted = "submitted"
    late = "late"
    graded = "graded"


# pending -> submitted -> graded, or pending -> late
STATUS_TRANSITIONS = {
    AssignmentStatus.pending: {AssignmentStatus.submitted, AssignmentStatus.late},
    AssignmentStatus.submitted: {AssignmentStatus.graded},
    AssignmentStatus.late: set(),
    AssignmentStatus.graded: set(),
}


class AssignmentBase(SQLModel):
    title: str = Field(min_length=1)
    course: str = Field(min_length=1)
    course_code: str = Field(min_length=1, index=True)
    due_date: date
    status: AssignmentStatus = Field(default=AssignmentStatus.pending, index=True)
    description: Optional[str] = None
    posted_date: date = Field(default_factory=today)
    file_url: Optional[str] = None


class Assignment(AssignmentBase, table=True):
    __tablename__ = "assignments"
    id: Optional[int] = Field(default=None, primary_key=True)


class AssignmentCreate(AssignmentBase):
    pass


class AssignmentUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1)
    course: Optional[str] = Field(default=None, min_length=1)
    course_code: Optional[str] = Field(default=None, min_length=1)
    due_date: Optional[date] = None
    status: Optional[AssignmentStatus] = None
    description: Optional[str] = None
    file_url: Optional[str] = None
