from datetime import date
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

from portal.utils.utils import today


class SubmissionStatus(str, Enum):
    submitted = "submitted"
    late = "late"
    graded = "graded"


class SubmissionBase(SQLModel):
    # Weak references: existence is checked by the submission service, nothing cascades.
    assignment_id: int = Field(index=True)
    student_id: int = Field(index=True)
    submission_date: Optional[date] = Field(default_factory=today)
    status: SubmissionStatus = Field(default=SubmissionStatus.submitted)
    grade: Optional[str] = None
    feedback: Optional[str] = None


class Submission(SubmissionBase, table=True):
    __tablename__ = "submissions"
    id: Optional[int] = Field(default=None, primary_key=True)


class SubmissionCreate(SubmissionBase):
    pass


class SubmissionUpdate(SQLModel):
    status: Optional[SubmissionStatus] = None
    grade: Optional[str] = None
    feedback: Optional[str] = None
