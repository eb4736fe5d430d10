from typing import Optional

from pydantic import BaseModel, Field

from portal.models import User, UserRole


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)
    role: UserRole = UserRole.student
    # required for students, must match an unassigned roster entry
    student_id: Optional[str] = None


class LoginRequest(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    id: int
    username: str
    full_name: str
    role: UserRole
    student_id: Optional[str] = None
    section: Optional[str] = None
    department: Optional[str] = None
    year: Optional[int] = None
    semester: Optional[str] = None
    cgpa: Optional[str] = None

    @staticmethod
    def from_user(user: User | None) -> Optional['UserResponse']:
        if user is None:
            return None
        return UserResponse.model_validate(user.model_dump())
