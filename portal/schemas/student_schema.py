from typing import Optional

from pydantic import BaseModel, Field


class StudentIdRequest(BaseModel):
    student_id: str = Field(min_length=1)
    section: Optional[str] = None
    department: Optional[str] = None
    year: Optional[int] = None
    semester: Optional[str] = None
