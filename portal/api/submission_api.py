from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from portal.api.deps import get_storage
from portal.auth.gate import GatedRoute, Operation, require
from portal.models import EntityKind, Submission
from portal.models.submission import SubmissionUpdate
from portal.schemas.submission_schema import SubmissionRequest
from portal.services import submission_service
from portal.services.storage import Storage

router = APIRouter(prefix="/api/submissions", tags=["submissions"], route_class=GatedRoute)


@router.get("", response_model=List[Submission])
def list_submissions(
    assignment_id: Optional[int] = Query(None),
    student_id: Optional[int] = Query(None),
    current_user=Depends(require(EntityKind.submissions, Operation.list)),
    storage: Storage = Depends(get_storage),
):
    return submission_service.list_submissions(storage, current_user, assignment_id, student_id)


@router.post("", response_model=Submission, status_code=201)
def create_submission(
    submission: SubmissionRequest,
    current_user=Depends(require(EntityKind.submissions, Operation.create)),
    storage: Storage = Depends(get_storage),
):
    return submission_service.submit(storage, current_user, submission)


@router.put("/{submission_id}", response_model=Submission)
def grade_submission(
    submission_id: int,
    update: SubmissionUpdate,
    current_user=Depends(require(EntityKind.submissions, Operation.update)),
    storage: Storage = Depends(get_storage),
):
    return submission_service.grade(storage, submission_id, update)
