from datetime import datetime
from typing import Optional

from pydantic import field_validator
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from portal.utils.utils import to_naive_utc, utcnow


class NoticeBase(SQLModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    category: str = Field(min_length=1, index=True)  # 'General', 'Exam', 'Holiday', 'Urgent', ...
    posted_date: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    # Stored only; expired notices are not removed from the table.
    expiry_date: Optional[datetime] = Field(default=None, sa_type=DateTime)

    @field_validator("posted_date", "expiry_date")
    @classmethod
    def _naive_utc(cls, value):
        return to_naive_utc(value)


class Notice(NoticeBase, table=True):
    __tablename__ = "notices"
    id: Optional[int] = Field(default=None, primary_key=True)


class NoticeCreate(NoticeBase):
    pass


class NoticeUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    expiry_date: Optional[datetime] = None

    @field_validator("expiry_date")
    @classmethod
    def _naive_utc(cls, value):
        return to_naive_utc(value)
