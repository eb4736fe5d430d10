from typing import Optional

from sqlmodel import Field, SQLModel


class StudentIdBase(SQLModel):
    student_id: str = Field(index=True, unique=True, min_length=1)
    section: Optional[str] = None
    department: Optional[str] = None
    year: Optional[int] = None
    semester: Optional[str] = None
    assigned: bool = False
    user_id: Optional[int] = None


class StudentIdEntry(StudentIdBase, table=True):
    """Roster entry an admin issues before a student can register with it."""
    __tablename__ = "student_ids"
    id: Optional[int] = Field(default=None, primary_key=True)


class StudentIdCreate(StudentIdBase):
    pass


class StudentIdUpdate(SQLModel):
    section: Optional[str] = None
    department: Optional[str] = None
    year: Optional[int] = None
    semester: Optional[str] = None
    assigned: Optional[bool] = None
    user_id: Optional[int] = None
