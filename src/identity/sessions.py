"""In-process session store.

Maps an opaque token (carried in an HTTP-only cookie) to a user id. Entries
expire ``max_age`` seconds after they are created and are pruned lazily on
access. Sessions do not survive a restart and are not shared between worker
processes.
"""

import secrets
import threading
from datetime import datetime, timedelta
from typing import NamedTuple

from shared.clock import utcnow
from shared.config import get_config


class SessionEntry(NamedTuple):
    user_id: int
    expires_at: datetime


class MemorySessionStore:
    def __init__(self, max_age: int | None = None):
        self._max_age = max_age
        self._sessions: dict[str, SessionEntry] = {}
        self._lock = threading.Lock()

    @property
    def max_age(self) -> int:
        return self._max_age or get_config().session.max_age

    def create(self, user_id: int) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._prune()
            self._sessions[token] = SessionEntry(user_id, utcnow() + timedelta(seconds=self.max_age))
        return token

    def get(self, token: str) -> int | None:
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None
            if entry.expires_at <= utcnow():
                del self._sessions[token]
                return None
            return entry.user_id

    def delete(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def delete_for_user(self, user_id: int) -> None:
        with self._lock:
            for token in [t for t, e in self._sessions.items() if e.user_id == user_id]:
                del self._sessions[token]

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)

    def _prune(self) -> None:
        now = utcnow()
        for token in [t for t, e in self._sessions.items() if e.expires_at <= now]:
            del self._sessions[token]


session_store = MemorySessionStore()
