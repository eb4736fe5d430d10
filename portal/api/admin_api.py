from typing import List

from fastapi import APIRouter, Depends

from portal.api.deps import get_storage
from portal.auth.gate import GatedRoute, Operation, require
from portal.models import EntityKind, StudentIdEntry
from portal.models.student_id import StudentIdUpdate
from portal.schemas.student_schema import StudentIdRequest
from portal.services import user_service
from portal.services.storage import Storage

router = APIRouter(prefix="/api/admin", tags=["admin"], route_class=GatedRoute)


@router.get("/students", response_model=List[StudentIdEntry])
def list_students(
    current_user=Depends(require(EntityKind.student_ids, Operation.list)),
    storage: Storage = Depends(get_storage),
):
    return user_service.list_student_ids(storage)


@router.post("/student-ids", response_model=StudentIdEntry, status_code=201)
def add_student_id(
    entry: StudentIdRequest,
    current_user=Depends(require(EntityKind.student_ids, Operation.create)),
    storage: Storage = Depends(get_storage),
):
    return user_service.add_student_id(storage, entry)


@router.put("/student-ids/{entry_id}", response_model=StudentIdEntry)
def update_student_id(
    entry_id: int,
    update: StudentIdUpdate,
    current_user=Depends(require(EntityKind.student_ids, Operation.update)),
    storage: Storage = Depends(get_storage),
):
    return user_service.update_student_id(storage, entry_id, update)
