import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import update
from sqlmodel import select

from portal.configs.database import init_db, session_scope
from portal.models.registry import ENTITIES, EntityKind
from portal.services.storage import Storage

logger = logging.getLogger(__name__)


class DatabaseStorage(Storage):
    """Relational storage on a SQLModel engine, one session per operation."""

    def __init__(self, engine):
        self.engine = engine

    def init_schema(self) -> None:
        init_db(self.engine)

    def close(self) -> None:
        logger.info("Disposing database connection pool")
        self.engine.dispose()

    def _list(self, kind: EntityKind, filters: Dict[str, Any]) -> List[Any]:
        spec = ENTITIES[kind]
        model = spec.model
        statement = select(model)
        for key, value in filters.items():
            statement = statement.where(getattr(model, key) == value)
        if spec.order_by is None:
            statement = statement.order_by(model.id)
        else:
            statement = statement.order_by(getattr(model, spec.order_by).desc().nulls_last(), model.id.desc())
        with session_scope(self.engine) as session:
            return list(session.exec(statement).all())

    def _get(self, kind: EntityKind, entity_id: int) -> Optional[Any]:
        with session_scope(self.engine) as session:
            return session.get(ENTITIES[kind].model, entity_id)

    def _create(self, kind: EntityKind, values: Dict[str, Any]) -> Any:
        record = ENTITIES[kind].model.model_validate(values)
        with session_scope(self.engine) as session:
            session.add(record)
            session.commit()
            session.refresh(record)
            return record

    def _update(self, kind: EntityKind, entity_id: int, changes: Dict[str, Any]) -> Optional[Any]:
        with session_scope(self.engine) as session:
            record = session.get(ENTITIES[kind].model, entity_id)
            if not record:
                return None
            merged = self._merge(kind, record.model_dump(), changes)
            for key in changes:
                setattr(record, key, merged[key])
            session.add(record)
            session.commit()
            session.refresh(record)
            return record

    def _update_if(self, kind: EntityKind, entity_id: int, expected: Dict[str, Any],
                   changes: Dict[str, Any]) -> Optional[Any]:
        model = ENTITIES[kind].model
        with session_scope(self.engine) as session:
            record = session.get(model, entity_id)
            if not record or any(getattr(record, key) != value for key, value in expected.items()):
                return None
            merged = self._merge(kind, record.model_dump(), changes)
            if changes:
                # the expected values guard the UPDATE itself, not just the read above
                statement = update(model).where(model.id == entity_id)
                for key, value in expected.items():
                    statement = statement.where(getattr(model, key) == value)
                result = session.connection().execute(statement.values(**{key: merged[key] for key in changes}))
                if result.rowcount == 0:
                    return None
                session.commit()
                session.refresh(record)
            return record

    def _delete(self, kind: EntityKind, entity_id: int) -> bool:
        with session_scope(self.engine) as session:
            record = session.get(ENTITIES[kind].model, entity_id)
            if not record:
                return False
            session.delete(record)
            session.commit()
            return True
