from typing import Any

from portal.errors import NotFoundError
from portal.models import EntityKind
from portal.services.storage import Storage


def get_or_404(storage: Storage, kind: EntityKind, entity_id: int, label: str) -> Any:
    record = storage.get(kind, entity_id)
    if not record:
        raise NotFoundError(f"{label} not found")
    return record


def update_or_404(storage: Storage, kind: EntityKind, entity_id: int, partial: Any, label: str) -> Any:
    record = storage.update(kind, entity_id, partial)
    if not record:
        raise NotFoundError(f"{label} not found")
    return record


def delete_or_404(storage: Storage, kind: EntityKind, entity_id: int, label: str) -> None:
    if not storage.delete(kind, entity_id):
        raise NotFoundError(f"{label} not found")
