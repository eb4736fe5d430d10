"""Storage contract shared by the in-memory and the relational backends.

Validation, immutable-field stripping and uniqueness checks live here so both
backends reject bad input identically and before anything is written.
"""
import logging
from abc import ABC, abstractmethod
from contextlib import nullcontext
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from portal.errors import ValidationError, validation_details
from portal.models.registry import ENTITIES, EntityKind
from portal.models.user import User

logger = logging.getLogger(__name__)


def _as_dict(data: Any, exclude_unset: bool = False) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=exclude_unset)
    return dict(data)


class Storage(ABC):

    # --- contract ---------------------------------------------------------

    def list(self, kind: EntityKind, **filters) -> List[Any]:
        spec = ENTITIES[kind]
        unknown = set(filters) - spec.filterable
        if unknown:
            raise ValueError(f"Cannot filter {kind.value} by {sorted(unknown)}")
        active = {key: value for key, value in filters.items() if value is not None}
        return self._list(kind, active)

    def get(self, kind: EntityKind, entity_id: int) -> Optional[Any]:
        return self._get(kind, entity_id)

    def create(self, kind: EntityKind, data: Any) -> Any:
        values = self._validate_create(kind, data)
        with self._write_guard():
            self._check_unique(kind, values)
            record = self._create(kind, values)
        logger.debug(f"Created {kind.value} #{record.id}")
        return record

    def update(self, kind: EntityKind, entity_id: int, partial: Any) -> Optional[Any]:
        changes = self._validate_update(kind, partial)
        return self._update(kind, entity_id, changes)

    def update_if(self, kind: EntityKind, entity_id: int, expected: Dict[str, Any], partial: Any) -> Optional[Any]:
        """Apply the update only while the stored row still holds the expected values.

        The check and the write happen as one step, so of two callers racing on
        the same expected state exactly one gets the record back; the other gets None.
        """
        changes = self._validate_update(kind, partial)
        return self._update_if(kind, entity_id, expected, changes)

    def delete(self, kind: EntityKind, entity_id: int) -> bool:
        return self._delete(kind, entity_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        users = self.list(EntityKind.users, username=username)
        return users[0] if users else None

    def close(self) -> None:
        pass

    # --- backend hooks ----------------------------------------------------

    @abstractmethod
    def _list(self, kind: EntityKind, filters: Dict[str, Any]) -> List[Any]:
        ...

    @abstractmethod
    def _get(self, kind: EntityKind, entity_id: int) -> Optional[Any]:
        ...

    @abstractmethod
    def _create(self, kind: EntityKind, values: Dict[str, Any]) -> Any:
        ...

    @abstractmethod
    def _update(self, kind: EntityKind, entity_id: int, changes: Dict[str, Any]) -> Optional[Any]:
        ...

    @abstractmethod
    def _update_if(self, kind: EntityKind, entity_id: int, expected: Dict[str, Any],
                   changes: Dict[str, Any]) -> Optional[Any]:
        ...

    @abstractmethod
    def _delete(self, kind: EntityKind, entity_id: int) -> bool:
        ...

    def _write_guard(self):
        return nullcontext()

    # --- shared validation ------------------------------------------------

    def _validate_create(self, kind: EntityKind, data: Any) -> Dict[str, Any]:
        spec = ENTITIES[kind]
        payload = _as_dict(data)
        payload.pop("id", None)
        try:
            validated = spec.create_schema.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {kind.value} data", errors=validation_details(e.errors())) from e
        return validated.model_dump()

    def _validate_update(self, kind: EntityKind, partial: Any) -> Dict[str, Any]:
        spec = ENTITIES[kind]
        payload = _as_dict(partial, exclude_unset=True)
        for key in spec.immutable:
            payload.pop(key, None)
        try:
            validated = spec.update_schema.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {kind.value} data", errors=validation_details(e.errors())) from e
        return validated.model_dump(exclude_unset=True)

    def _merge(self, kind: EntityKind, current: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
        """Merge changes into a stored row and re-check the whole record."""
        spec = ENTITIES[kind]
        merged = {**current, **changes}
        try:
            spec.create_schema.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {kind.value} data", errors=validation_details(e.errors())) from e
        return merged

    def _check_unique(self, kind: EntityKind, values: Dict[str, Any]) -> None:
        for field in ENTITIES[kind].unique:
            if self._list(kind, {field: values[field]}):
                raise ValidationError(f"{field.replace('_', ' ').capitalize()} already exists")
