from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from portal.api.deps import get_storage
from portal.auth.gate import GatedRoute, Operation, require
from portal.models import EntityKind, Notice
from portal.models.notice import NoticeCreate, NoticeUpdate
from portal.services import notice_service
from portal.services.entity_service import delete_or_404, get_or_404, update_or_404
from portal.services.storage import Storage

router = APIRouter(prefix="/api/notices", tags=["notices"], route_class=GatedRoute)


@router.get("", response_model=List[Notice])
def list_notices(
    category: Optional[str] = Query(None),
    active: bool = Query(False, description="Only notices that have not expired"),
    current_user=Depends(require(EntityKind.notices, Operation.list)),
    storage: Storage = Depends(get_storage),
):
    return notice_service.list_notices(storage, category=category, active_only=active)


@router.get("/{notice_id}", response_model=Notice)
def get_notice(
    notice_id: int,
    current_user=Depends(require(EntityKind.notices, Operation.read)),
    storage: Storage = Depends(get_storage),
):
    return get_or_404(storage, EntityKind.notices, notice_id, "Notice")


@router.post("", response_model=Notice, status_code=201)
def create_notice(
    notice: NoticeCreate,
    current_user=Depends(require(EntityKind.notices, Operation.create)),
    storage: Storage = Depends(get_storage),
):
    return storage.create(EntityKind.notices, notice)


@router.put("/{notice_id}", response_model=Notice)
def update_notice(
    notice_id: int,
    update: NoticeUpdate,
    current_user=Depends(require(EntityKind.notices, Operation.update)),
    storage: Storage = Depends(get_storage),
):
    return update_or_404(storage, EntityKind.notices, notice_id, update, "Notice")


@router.delete("/{notice_id}", status_code=204)
def delete_notice(
    notice_id: int,
    current_user=Depends(require(EntityKind.notices, Operation.delete)),
    storage: Storage = Depends(get_storage),
):
    delete_or_404(storage, EntityKind.notices, notice_id, "Notice")
    return Response(status_code=204)
