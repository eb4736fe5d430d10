from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class UserRole(str, Enum):
    student = "student"
    admin = "admin"


class UserBase(SQLModel):
    username: str = Field(index=True, unique=True, min_length=1, max_length=64)
    full_name: str = Field(min_length=1)
    role: UserRole = Field(default=UserRole.student, index=True)
    # Student specific fields
    student_id: Optional[str] = None
    section: Optional[str] = None
    department: Optional[str] = None
    year: Optional[int] = None
    semester: Optional[str] = None
    cgpa: Optional[str] = None


class User(UserBase, table=True):
    """User model represents a student or an admin of the portal."""
    __tablename__ = "users"
    id: Optional[int] = Field(default=None, primary_key=True)
    password: str  # bcrypt hash, never plaintext


class UserCreate(UserBase):
    password: str = Field(min_length=1)


class UserUpdate(SQLModel):
    full_name: Optional[str] = Field(default=None, min_length=1)
    student_id: Optional[str] = None
    section: Optional[str] = None
    department: Optional[str] = None
    year: Optional[int] = None
    semester: Optional[str] = None
    cgpa: Optional[str] = None
