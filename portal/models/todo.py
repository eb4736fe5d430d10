from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from portal.utils.utils import utcnow


class TodoBase(SQLModel):
    user_id: int = Field(index=True)
    text: str = Field(min_length=1)
    completed: bool = False
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class Todo(TodoBase, table=True):
    __tablename__ = "todos"
    id: Optional[int] = Field(default=None, primary_key=True)


class TodoCreate(TodoBase):
    pass


class TodoUpdate(SQLModel):
    text: Optional[str] = Field(default=None, min_length=1)
    completed: Optional[bool] = None
