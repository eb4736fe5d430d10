import datetime as dt
from typing import Optional

from sqlmodel import Field, SQLModel


class EventBase(SQLModel):
    title: str = Field(min_length=1)
    date: dt.date
    category: str = Field(min_length=1, index=True)  # 'Assignment', 'Exam', 'Holiday', ...
    description: Optional[str] = None


class Event(EventBase, table=True):
    __tablename__ = "events"
    id: Optional[int] = Field(default=None, primary_key=True)


class EventCreate(EventBase):
    pass


class EventUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1)
    date: Optional[dt.date] = None
    category: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
