from typing import List

from fastapi import APIRouter, Depends

from portal.api.deps import get_storage
from portal.auth.gate import GatedRoute, Operation, require
from portal.models import EntityKind, Message
from portal.schemas.message_schema import MessageRequest
from portal.services import message_service
from portal.services.storage import Storage

router = APIRouter(prefix="/api/messages", tags=["messages"], route_class=GatedRoute)


@router.get("", response_model=List[Message])
def list_messages(
    current_user=Depends(require(EntityKind.messages, Operation.list)),
    storage: Storage = Depends(get_storage),
):
    return message_service.list_messages(storage, current_user)


@router.post("", response_model=Message, status_code=201)
def send_message(
    message: MessageRequest,
    current_user=Depends(require(EntityKind.messages, Operation.create)),
    storage: Storage = Depends(get_storage),
):
    return message_service.send_message(storage, current_user, message)


@router.put("/{message_id}/read", response_model=Message)
def mark_message_read(
    message_id: int,
    current_user=Depends(require(EntityKind.messages, Operation.update)),
    storage: Storage = Depends(get_storage),
):
    return message_service.mark_as_read(storage, current_user, message_id)
