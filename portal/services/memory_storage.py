import itertools
import logging
import threading
from typing import Any, Dict, List, Optional

from portal.models.registry import ENTITIES, EntityKind
from portal.services.storage import Storage

logger = logging.getLogger(__name__)


def _ordered(kind: EntityKind, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    column = ENTITIES[kind].order_by
    if column is None:
        return sorted(rows, key=lambda row: row["id"])
    # newest first, ties broken by newest id, rows without a timestamp last
    rows = sorted(rows, key=lambda row: row["id"], reverse=True)
    dated = [row for row in rows if row[column] is not None]
    undated = [row for row in rows if row[column] is None]
    dated.sort(key=lambda row: row[column], reverse=True)
    return dated + undated


class MemStorage(Storage):
    """Volatile storage: one dict of plain rows per entity kind.

    Rows are copied in and out so callers never hold a reference into the store.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._tables: Dict[EntityKind, Dict[int, Dict[str, Any]]] = {kind: {} for kind in EntityKind}
        self._counters = {kind: itertools.count(1) for kind in EntityKind}

    def _to_record(self, kind: EntityKind, row: Dict[str, Any]) -> Any:
        return ENTITIES[kind].model.model_validate(dict(row))

    def _write_guard(self):
        return self._lock

    def _list(self, kind: EntityKind, filters: Dict[str, Any]) -> List[Any]:
        with self._lock:
            rows = [
                dict(row) for row in self._tables[kind].values()
                if all(row.get(key) == value for key, value in filters.items())
            ]
        return [self._to_record(kind, row) for row in _ordered(kind, rows)]

    def _get(self, kind: EntityKind, entity_id: int) -> Optional[Any]:
        with self._lock:
            row = self._tables[kind].get(entity_id)
            row = dict(row) if row is not None else None
        return self._to_record(kind, row) if row is not None else None

    def _create(self, kind: EntityKind, values: Dict[str, Any]) -> Any:
        with self._lock:
            entity_id = next(self._counters[kind])
            record = self._to_record(kind, {**values, "id": entity_id})
            self._tables[kind][entity_id] = record.model_dump()
        return record

    def _update(self, kind: EntityKind, entity_id: int, changes: Dict[str, Any]) -> Optional[Any]:
        return self._update_if(kind, entity_id, {}, changes)

    def _update_if(self, kind: EntityKind, entity_id: int, expected: Dict[str, Any],
                   changes: Dict[str, Any]) -> Optional[Any]:
        with self._lock:
            current = self._tables[kind].get(entity_id)
            if current is None or any(current.get(key) != value for key, value in expected.items()):
                return None
            merged = self._merge(kind, current, changes)
            record = self._to_record(kind, merged)
            self._tables[kind][entity_id] = record.model_dump()
        return record

    def _delete(self, kind: EntityKind, entity_id: int) -> bool:
        with self._lock:
            return self._tables[kind].pop(entity_id, None) is not None
