from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from portal.utils.utils import utcnow


class UserSession(SQLModel, table=True):
    __tablename__ = "sessions"
    sid: str = Field(primary_key=True)
    user_id: int = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    expires_at: datetime = Field(index=True, sa_type=DateTime)
    last_seen: Optional[datetime] = Field(default=None, sa_type=DateTime)
