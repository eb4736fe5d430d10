import logging
from typing import List

from portal.errors import AuthorizationError
from portal.models import EntityKind, Message
from portal.models.message import MessageCreate
from portal.schemas.message_schema import MessageRequest
from portal.schemas.user_schema import UserResponse
from portal.services.entity_service import get_or_404, update_or_404
from portal.services.storage import Storage
from portal.utils.utils import utcnow

logger = logging.getLogger(__name__)


def _visible_to(message: Message, user_id: int) -> bool:
    return message.sender_id == user_id or message.receiver_id in (user_id, None)


def list_messages(storage: Storage, identity: UserResponse) -> List[Message]:
    """Messages the caller sent or received, plus broadcasts."""
    return [message for message in storage.list(EntityKind.messages) if _visible_to(message, identity.id)]


def send_message(storage: Storage, identity: UserResponse, request: MessageRequest) -> Message:
    if request.receiver_id is not None:
        get_or_404(storage, EntityKind.users, request.receiver_id, "Receiver")
    return storage.create(EntityKind.messages, MessageCreate(
        sender_id=identity.id,
        receiver_id=request.receiver_id,
        content=request.content,
        timestamp=utcnow(),
    ))


def mark_as_read(storage: Storage, identity: UserResponse, message_id: int) -> Message:
    message = get_or_404(storage, EntityKind.messages, message_id, "Message")
    if message.receiver_id is None:
        allowed = message.sender_id != identity.id
    else:
        allowed = message.receiver_id == identity.id
    if not allowed:
        logger.warning(f"User {identity.username} cannot mark message #{message_id} as read")
        raise AuthorizationError("Only the receiver can mark a message as read")
    return update_or_404(storage, EntityKind.messages, message_id, {"read": True}, "Message")
