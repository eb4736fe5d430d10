from typing import Dict

from fastapi import APIRouter, Depends

from portal.api.deps import get_storage
from portal.auth.auth_handler import get_current_user
from portal.auth.gate import GatedRoute
from portal.schemas.support_schema import SupportChatRequest, SupportChatResponse
from portal.schemas.user_schema import UserResponse
from portal.services import dashboard_service, support_service
from portal.services.storage import Storage
from portal.utils.utils import utcnow

router = APIRouter(prefix="/api", tags=["dashboard"], route_class=GatedRoute)


@router.get("/dashboard/stats", response_model=Dict[str, int])
def read_stats(current_user: UserResponse = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return dashboard_service.collect_stats(storage)


@router.post("/support/chat", response_model=SupportChatResponse)
def support_chat(chat: SupportChatRequest, current_user: UserResponse = Depends(get_current_user)):
    return SupportChatResponse(reply=support_service.support_reply(current_user.role), timestamp=utcnow())
