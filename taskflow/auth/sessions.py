"""
Server-side session bags.
The cookie only carries a signed session id; the data lives here until it expires.
"""
import threading
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from fastapi import Depends
from sqlalchemy import delete
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..models.models import SessionRecord


class SessionStoreError(Exception):
    """The session store could not complete a write or delete."""


class SessionStore:
    def load(self, sid: str) -> Optional[dict]:
        raise NotImplementedError

    def save(self, sid: str, data: dict, ttl_seconds: int) -> None:
        raise NotImplementedError

    def destroy(self, sid: str) -> None:
        raise NotImplementedError

    def prune_expired(self) -> int:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: Dict[str, Tuple[dict, datetime]] = {}

    def load(self, sid: str) -> Optional[dict]:
        item = self._sessions.get(sid)
        if not item:
            return None
        data, expire = item
        if expire <= datetime.utcnow():
            return None
        return dict(data)

    def save(self, sid: str, data: dict, ttl_seconds: int) -> None:
        with self._lock:
            self._sessions[sid] = (dict(data), datetime.utcnow() + timedelta(seconds=ttl_seconds))

    def destroy(self, sid: str) -> None:
        with self._lock:
            self._sessions.pop(sid, None)

    def prune_expired(self) -> int:
        now = datetime.utcnow()
        with self._lock:
            expired = [sid for sid, (_, expire) in self._sessions.items() if expire <= now]
            for sid in expired:
                del self._sessions[sid]
        return len(expired)


class DatabaseSessionStore(SessionStore):
    def __init__(self, db: Session):
        self.db = db

    def load(self, sid: str) -> Optional[dict]:
        row = self.db.get(SessionRecord, sid)
        if row is None or row.expire <= datetime.utcnow():
            return None
        return dict(row.sess or {})

    def save(self, sid: str, data: dict, ttl_seconds: int) -> None:
        expire = datetime.utcnow() + timedelta(seconds=ttl_seconds)
        try:
            row = self.db.get(SessionRecord, sid)
            if row is None:
                self.db.add(SessionRecord(sid=sid, sess=dict(data), expire=expire))
            else:
                row.sess = dict(data)
                row.expire = expire
            self.db.commit()
        except Exception as exc:
            self.db.rollback()
            raise SessionStoreError(str(exc)) from exc

    def destroy(self, sid: str) -> None:
        try:
            self.db.execute(delete(SessionRecord).where(SessionRecord.sid == sid))
            self.db.commit()
        except Exception as exc:
            self.db.rollback()
            raise SessionStoreError(str(exc)) from exc

    def prune_expired(self) -> int:
        result = self.db.execute(delete(SessionRecord).where(SessionRecord.expire <= datetime.utcnow()))
        self.db.commit()
        return result.rowcount


_memory_sessions = None


def get_memory_session_store() -> MemorySessionStore:
    global _memory_sessions
    if _memory_sessions is None:
        _memory_sessions = MemorySessionStore()
    return _memory_sessions


def get_session_store(db: Session = Depends(get_db)) -> SessionStore:
    if settings.storage_backend == "memory":
        return get_memory_session_store()
    return DatabaseSessionStore(db)
