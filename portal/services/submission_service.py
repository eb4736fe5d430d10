import logging
from typing import List, Optional

from portal.models import EntityKind, Submission, SubmissionStatus, UserRole
from portal.models.submission import SubmissionCreate, SubmissionUpdate
from portal.schemas.submission_schema import SubmissionRequest
from portal.schemas.user_schema import UserResponse
from portal.services.entity_service import get_or_404, update_or_404
from portal.services.storage import Storage
from portal.utils.utils import today

logger = logging.getLogger(__name__)


def list_submissions(storage: Storage, identity: UserResponse, assignment_id: Optional[int] = None,
                     student_id: Optional[int] = None) -> List[Submission]:
    if identity.role is UserRole.student:
        student_id = identity.id
    return storage.list(EntityKind.submissions, assignment_id=assignment_id, student_id=student_id)


def submit(storage: Storage, identity: UserResponse, request: SubmissionRequest) -> Submission:
    """Record a submission; re-submitting the same assignment is allowed."""
    assignment = get_or_404(storage, EntityKind.assignments, request.assignment_id, "Assignment")
    submitted_on = today()
    status = SubmissionStatus.late if submitted_on > assignment.due_date else SubmissionStatus.submitted
    submission = storage.create(EntityKind.submissions, SubmissionCreate(
        assignment_id=assignment.id,
        student_id=identity.id,
        submission_date=submitted_on,
        status=status,
    ))
    logger.info(f"Student {identity.username} submitted assignment #{assignment.id} ({status.value})")
    return submission


def grade(storage: Storage, submission_id: int, update: SubmissionUpdate) -> Submission:
    changes = update.model_dump(exclude_unset=True)
    if changes.get("grade") is not None and "status" not in changes:
        changes["status"] = SubmissionStatus.graded
    return update_or_404(storage, EntityKind.submissions, submission_id, changes, "Submission")
