import logging

from portal.errors import ValidationError
from portal.models import Assignment, EntityKind
from portal.models.assignment import STATUS_TRANSITIONS, AssignmentUpdate
from portal.services.entity_service import get_or_404, update_or_404
from portal.services.storage import Storage

logger = logging.getLogger(__name__)


def update_assignment(storage: Storage, assignment_id: int, update: AssignmentUpdate) -> Assignment:
    current = get_or_404(storage, EntityKind.assignments, assignment_id, "Assignment")
    target = update.status
    if target is not None and target != current.status and target not in STATUS_TRANSITIONS[current.status]:
        raise ValidationError(f"Cannot move assignment from {current.status.value} to {target.value}")
    assignment = update_or_404(storage, EntityKind.assignments, assignment_id, update, "Assignment")
    logger.info(f"Assignment #{assignment_id} updated")
    return assignment
