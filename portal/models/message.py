from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from portal.utils.utils import utcnow


class MessageBase(SQLModel):
    sender_id: int = Field(index=True)
    receiver_id: Optional[int] = Field(default=None, index=True)  # None is a broadcast
    content: str = Field(min_length=1)
    timestamp: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    read: bool = False


class Message(MessageBase, table=True):
    __tablename__ = "messages"
    id: Optional[int] = Field(default=None, primary_key=True)


class MessageCreate(MessageBase):
    pass


class MessageUpdate(SQLModel):
    read: Optional[bool] = None
