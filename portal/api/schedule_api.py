from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from portal.api.deps import get_storage
from portal.auth.gate import GatedRoute, Operation, require
from portal.models import EntityKind, Schedule, ScheduleStatus, Weekday
from portal.models.schedule import ScheduleCreate, ScheduleUpdate
from portal.services.entity_service import delete_or_404, get_or_404, update_or_404
from portal.services.storage import Storage

router = APIRouter(prefix="/api/schedule", tags=["schedule"], route_class=GatedRoute)


@router.get("", response_model=List[Schedule])
def list_schedule(
    day: Optional[Weekday] = Query(None),
    status: Optional[ScheduleStatus] = Query(None),
    current_user=Depends(require(EntityKind.schedule, Operation.list)),
    storage: Storage = Depends(get_storage),
):
    return storage.list(EntityKind.schedule, day=day, status=status)


@router.get("/{schedule_id}", response_model=Schedule)
def get_schedule_item(
    schedule_id: int,
    current_user=Depends(require(EntityKind.schedule, Operation.read)),
    storage: Storage = Depends(get_storage),
):
    return get_or_404(storage, EntityKind.schedule, schedule_id, "Schedule item")


@router.post("", response_model=Schedule, status_code=201)
def create_schedule_item(
    item: ScheduleCreate,
    current_user=Depends(require(EntityKind.schedule, Operation.create)),
    storage: Storage = Depends(get_storage),
):
    return storage.create(EntityKind.schedule, item)


@router.put("/{schedule_id}", response_model=Schedule)
def update_schedule_item(
    schedule_id: int,
    update: ScheduleUpdate,
    current_user=Depends(require(EntityKind.schedule, Operation.update)),
    storage: Storage = Depends(get_storage),
):
    return update_or_404(storage, EntityKind.schedule, schedule_id, update, "Schedule item")


@router.delete("/{schedule_id}", status_code=204)
def delete_schedule_item(
    schedule_id: int,
    current_user=Depends(require(EntityKind.schedule, Operation.delete)),
    storage: Storage = Depends(get_storage),
):
    delete_or_404(storage, EntityKind.schedule, schedule_id, "Schedule item")
    return Response(status_code=204)
