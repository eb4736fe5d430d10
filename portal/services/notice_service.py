from typing import List, Optional

from portal.models import EntityKind, Notice
from portal.services.storage import Storage
from portal.utils.utils import utcnow


def is_active(notice: Notice) -> bool:
    return notice.expiry_date is None or notice.expiry_date > utcnow()


def list_notices(storage: Storage, category: Optional[str] = None, active_only: bool = False) -> List[Notice]:
    notices = storage.list(EntityKind.notices, category=category)
    if active_only:
        notices = [notice for notice in notices if is_active(notice)]
    return notices
