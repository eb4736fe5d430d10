from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from portal.api.deps import get_storage
from portal.auth.gate import GatedRoute, Operation, require
from portal.models import EntityKind, Event
from portal.models.event import EventCreate, EventUpdate
from portal.services.entity_service import delete_or_404, get_or_404, update_or_404
from portal.services.storage import Storage

router = APIRouter(prefix="/api/events", tags=["events"], route_class=GatedRoute)


@router.get("", response_model=List[Event])
def list_events(
    category: Optional[str] = Query(None),
    current_user=Depends(require(EntityKind.events, Operation.list)),
    storage: Storage = Depends(get_storage),
):
    return storage.list(EntityKind.events, category=category)


@router.get("/{event_id}", response_model=Event)
def get_event(
    event_id: int,
    current_user=Depends(require(EntityKind.events, Operation.read)),
    storage: Storage = Depends(get_storage),
):
    return get_or_404(storage, EntityKind.events, event_id, "Event")


@router.post("", response_model=Event, status_code=201)
def create_event(
    event: EventCreate,
    current_user=Depends(require(EntityKind.events, Operation.create)),
    storage: Storage = Depends(get_storage),
):
    return storage.create(EntityKind.events, event)


@router.put("/{event_id}", response_model=Event)
def update_event(
    event_id: int,
    update: EventUpdate,
    current_user=Depends(require(EntityKind.events, Operation.update)),
    storage: Storage = Depends(get_storage),
):
    return update_or_404(storage, EntityKind.events, event_id, update, "Event")


@router.delete("/{event_id}", status_code=204)
def delete_event(
    event_id: int,
    current_user=Depends(require(EntityKind.events, Operation.delete)),
    storage: Storage = Depends(get_storage),
):
    delete_or_404(storage, EntityKind.events, event_id, "Event")
    return Response(status_code=204)
