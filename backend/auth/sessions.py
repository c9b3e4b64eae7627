"""Server-side admin sessions.

The browser only ever sees a signed token wrapping the session id; the
admin id lives here, in process memory, until logout or expiry.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock


@dataclass(frozen=True)
class AdminSession:
    session_id: str
    admin_id: int
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at


class SessionStore:
    def __init__(self, lifetime: timedelta) -> None:
        self.lifetime = lifetime
        self._sessions: dict[str, AdminSession] = {}
        self._lock = Lock()

    def create(self, admin_id: int) -> AdminSession:
        session = AdminSession(
            session_id=secrets.token_urlsafe(32),
            admin_id=admin_id,
            expires_at=datetime.now(timezone.utc) + self.lifetime,
        )
        with self._lock:
            self._purge_expired()
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> AdminSession | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_expired():
                del self._sessions[session_id]
                return None
            return session

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _purge_expired(self) -> None:
        now = datetime.now(timezone.utc)
        for session_id in [key for key, value in self._sessions.items() if value.is_expired(now)]:
            del self._sessions[session_id]
