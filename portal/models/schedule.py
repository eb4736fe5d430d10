import re
from enum import Enum
from typing import Optional

from pydantic import field_validator, model_validator
from sqlmodel import Field, SQLModel

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class Weekday(str, Enum):
    monday = "Monday"
    tuesday = "Tuesday"
    wednesday = "Wednesday"
    thursday = "Thursday"
    friday = "Friday"
    saturday = "Saturday"
    sunday = "Sunday"


class ScheduleStatus(str, Enum):
    active = "Active"
    cancelled = "Cancelled"


def _check_time(value: Optional[str]) -> Optional[str]:
    if value is not None and not _TIME_RE.match(value):
        raise ValueError("time must be formatted as HH:MM")
    return value


class ScheduleBase(SQLModel):
    day: Weekday = Field(index=True)
    start_time: str
    end_time: str
    course: str = Field(min_length=1)
    course_code: str = Field(min_length=1)
    room: Optional[str] = None
    building: Optional[str] = None
    class_type: str = Field(min_length=1)  # 'Lecture', 'Lab', 'Tutorial', ...
    status: ScheduleStatus = Field(default=ScheduleStatus.active, index=True)

    @field_validator("start_time", "end_time")
    @classmethod
    def _valid_time(cls, value):
        return _check_time(value)


class Schedule(ScheduleBase, table=True):
    __tablename__ = "schedule"
    id: Optional[int] = Field(default=None, primary_key=True)


class ScheduleCreate(ScheduleBase):

    @model_validator(mode="after")
    def _ends_after_start(self):
        # HH:MM strings compare in clock order
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ScheduleUpdate(SQLModel):
    day: Optional[Weekday] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    course: Optional[str] = Field(default=None, min_length=1)
    course_code: Optional[str] = Field(default=None, min_length=1)
    room: Optional[str] = None
    building: Optional[str] = None
    class_type: Optional[str] = Field(default=None, min_length=1)
    status: Optional[ScheduleStatus] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _valid_time(cls, value):
        return _check_time(value)
