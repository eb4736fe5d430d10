from datetime import date
from typing import Optional

from sqlmodel import Field, SQLModel

from portal.utils.utils import today


class ResourceBase(SQLModel):
    title: str = Field(min_length=1)
    course_code: Optional[str] = Field(default=None, index=True)
    category: str = Field(min_length=1, index=True)  # 'Lecture Notes', 'Textbooks', 'Reference Materials', ...
    file_type: str = Field(min_length=1)  # 'PDF', 'DOC', 'XLS', 'URL', ...
    file_size: Optional[str] = None
    file_url: str = Field(min_length=1)
    upload_date: date = Field(default_factory=today)


class Resource(ResourceBase, table=True):
    __tablename__ = "resources"
    id: Optional[int] = Field(default=None, primary_key=True)


class ResourceCreate(ResourceBase):
    pass


class ResourceUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1)
    course_code: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1)
    file_type: Optional[str] = Field(default=None, min_length=1)
    file_size: Optional[str] = None
    file_url: Optional[str] = Field(default=None, min_length=1)
