"""Session directory: opaque session ids mapped to user ids with expiry.

A session is created on login, stays active while it keeps resolving, and
ends when it is revoked (logout) or its expiry passes. Ended sessions never
resolve again. A user may hold any number of sessions at once.
"""
import logging
import secrets
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from sqlmodel import select

from portal.configs.database import session_scope
from portal.models.session import UserSession
from portal.utils.utils import utcnow

logger = logging.getLogger(__name__)


class SessionDirectory(ABC):

    def __init__(self, ttl: timedelta, sliding: bool = True, clock: Callable[[], datetime] = utcnow):
        self.ttl = ttl
        self.sliding = sliding
        self._clock = clock

    @staticmethod
    def _new_sid() -> str:
        return secrets.token_urlsafe(32)

    @abstractmethod
    def create(self, user_id: int) -> str:
        ...

    @abstractmethod
    def resolve(self, sid: str) -> Optional[int]:
        ...

    @abstractmethod
    def revoke(self, sid: str) -> bool:
        ...

    @abstractmethod
    def prune(self) -> int:
        ...

    def close(self) -> None:
        pass


@dataclass
class _SessionRecord:
    user_id: int
    created_at: datetime
    expires_at: datetime


class MemorySessionDirectory(SessionDirectory):
    """Volatile sessions, lost on restart. Expired entries are pruned lazily."""

    def __init__(self, ttl: timedelta, sliding: bool = True,
                 check_period: timedelta = timedelta(days=1),
                 clock: Callable[[], datetime] = utcnow):
        super().__init__(ttl, sliding, clock)
        self.check_period = check_period
        self._sessions: Dict[str, _SessionRecord] = {}
        self._lock = threading.Lock()
        self._last_prune = clock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, user_id: int) -> str:
        now = self._clock()
        sid = self._new_sid()
        with self._lock:
            if now - self._last_prune >= self.check_period:
                self._prune_locked(now)
            self._sessions[sid] = _SessionRecord(user_id=user_id, created_at=now, expires_at=now + self.ttl)
        return sid

    def resolve(self, sid: str) -> Optional[int]:
        now = self._clock()
        with self._lock:
            record = self._sessions.get(sid)
            if record is None:
                return None
            if record.expires_at <= now:
                del self._sessions[sid]
                return None
            if self.sliding:
                record.expires_at = now + self.ttl
            return record.user_id

    def revoke(self, sid: str) -> bool:
        with self._lock:
            return self._sessions.pop(sid, None) is not None

    def prune(self) -> int:
        with self._lock:
            return self._prune_locked(self._clock())

    def _prune_locked(self, now: datetime) -> int:
        expired = [sid for sid, record in self._sessions.items() if record.expires_at <= now]
        for sid in expired:
            del self._sessions[sid]
        self._last_prune = now
        if expired:
            logger.info(f"Pruned {len(expired)} expired sessions")
        return len(expired)


class DatabaseSessionDirectory(SessionDirectory):
    """Sessions kept in the ``sessions`` table so they survive restarts."""

    def __init__(self, engine, ttl: timedelta, sliding: bool = True,
                 clock: Callable[[], datetime] = utcnow):
        super().__init__(ttl, sliding, clock)
        self.engine = engine

    def create(self, user_id: int) -> str:
        now = self._clock()
        sid = self._new_sid()
        with session_scope(self.engine) as session:
            session.add(UserSession(sid=sid, user_id=user_id, created_at=now, expires_at=now + self.ttl))
            session.commit()
        return sid

    def resolve(self, sid: str) -> Optional[int]:
        now = self._clock()
        with session_scope(self.engine) as session:
            record = session.get(UserSession, sid)
            if not record:
                return None
            if record.expires_at <= now:
                session.delete(record)
                session.commit()
                return None
            user_id = record.user_id
            if self.sliding:
                record.expires_at = now + self.ttl
                record.last_seen = now
                session.add(record)
                session.commit()
            return user_id

    def revoke(self, sid: str) -> bool:
        with session_scope(self.engine) as session:
            record = session.get(UserSession, sid)
            if not record:
                return False
            session.delete(record)
            session.commit()
            return True

    def prune(self) -> int:
        now = self._clock()
        with session_scope(self.engine) as session:
            expired = session.exec(select(UserSession).where(UserSession.expires_at <= now)).all()
            for record in expired:
                session.delete(record)
            session.commit()
        if expired:
            logger.info(f"Pruned {len(expired)} expired sessions")
        return len(expired)
