from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from portal.api.deps import get_storage
from portal.auth.gate import GatedRoute, Operation, require
from portal.models import Assignment, AssignmentStatus, EntityKind
from portal.models.assignment import AssignmentCreate, AssignmentUpdate
from portal.services import assignment_service
from portal.services.entity_service import delete_or_404, get_or_404
from portal.services.storage import Storage

router = APIRouter(prefix="/api/assignments", tags=["assignments"], route_class=GatedRoute)


@router.get("", response_model=List[Assignment])
def list_assignments(
    status: Optional[AssignmentStatus] = Query(None),
    course_code: Optional[str] = Query(None),
    current_user=Depends(require(EntityKind.assignments, Operation.list)),
    storage: Storage = Depends(get_storage),
):
    return storage.list(EntityKind.assignments, status=status, course_code=course_code)


@router.get("/{assignment_id}", response_model=Assignment)
def get_assignment(
    assignment_id: int,
    current_user=Depends(require(EntityKind.assignments, Operation.read)),
    storage: Storage = Depends(get_storage),
):
    return get_or_404(storage, EntityKind.assignments, assignment_id, "Assignment")


@router.post("", response_model=Assignment, status_code=201)
def create_assignment(
    assignment: AssignmentCreate,
    current_user=Depends(require(EntityKind.assignments, Operation.create)),
    storage: Storage = Depends(get_storage),
):
    return storage.create(EntityKind.assignments, assignment)


@router.put("/{assignment_id}", response_model=Assignment)
def update_assignment(
    assignment_id: int,
    update: AssignmentUpdate,
    current_user=Depends(require(EntityKind.assignments, Operation.update)),
    storage: Storage = Depends(get_storage),
):
    return assignment_service.update_assignment(storage, assignment_id, update)


@router.delete("/{assignment_id}", status_code=204)
def delete_assignment(
    assignment_id: int,
    current_user=Depends(require(EntityKind.assignments, Operation.delete)),
    storage: Storage = Depends(get_storage),
):
    delete_or_404(storage, EntityKind.assignments, assignment_id, "Assignment")
    return Response(status_code=204)
