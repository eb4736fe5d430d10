from datetime import UTC, date, datetime
from typing import Optional


def utcnow() -> datetime:
    """Current time as naive UTC; sqlite drops tzinfo so every stored timestamp is naive."""
    return datetime.now(UTC).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def make_resource_file_path(course_code: Optional[str], file_name: str) -> str:
    course_dir = course_code or "general"
    return f"resources/{course_dir}/{file_name}"
