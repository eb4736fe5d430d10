from enum import Enum
from typing import Callable, Dict

from portal.models import AssignmentStatus, EntityKind
from portal.services import notice_service
from portal.services.storage import Storage
from portal.utils.utils import today


class StatKind(str, Enum):
    pending_assignments = "pending_assignments"
    upcoming_exams = "upcoming_exams"
    active_notices = "active_notices"


def _pending_assignments(storage: Storage) -> int:
    return len(storage.list(EntityKind.assignments, status=AssignmentStatus.pending))


def _upcoming_exams(storage: Storage) -> int:
    now = today()
    return len([event for event in storage.list(EntityKind.events, category="Exam") if event.date >= now])


def _active_notices(storage: Storage) -> int:
    return len(notice_service.list_notices(storage, active_only=True))


STAT_COUNTERS: Dict[StatKind, Callable[[Storage], int]] = {
    StatKind.pending_assignments: _pending_assignments,
    StatKind.upcoming_exams: _upcoming_exams,
    StatKind.active_notices: _active_notices,
}


def collect_stats(storage: Storage) -> Dict[str, int]:
    return {kind.value: counter(storage) for kind, counter in STAT_COUNTERS.items()}
