# Auth/sessions.py
import hashlib
import hmac
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass
class SessionRecord:
    session_id: str
    user_id: str
    expires_at: float


class SessionStore:
    """Server-side sessions keyed by an opaque token.

    The cookie only ever carries the token. Expired records are dropped the
    next time the store is touched.
    """

    def __init__(self, max_age: int, clock: Callable[[], float] = time.time):
        self.max_age = max_age
        self._clock = clock
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def create(self, user_id: str) -> SessionRecord:
        record = SessionRecord(
            session_id=secrets.token_urlsafe(32),
            user_id=user_id,
            expires_at=self._clock() + self.max_age,
        )
        with self._lock:
            self._prune()
            self._sessions[record.session_id] = record
        return record

    def get(self, session_id: Optional[str]) -> Optional[SessionRecord]:
        if not session_id:
            return None
        with self._lock:
            self._prune()
            return self._sessions.get(session_id)

    def destroy(self, session_id: Optional[str]) -> None:
        if not session_id:
            return
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            self._prune()
            return len(self._sessions)

    def _prune(self) -> None:
        now = self._clock()
        expired = [sid for sid, rec in self._sessions.items() if rec.expires_at <= now]
        for sid in expired:
            del self._sessions[sid]


# ── cookie value: "<session id>.<hmac-sha256 of the id>" ───────────────────
def _digest(session_id: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), session_id.encode("utf-8"), hashlib.sha256).hexdigest()


def sign(session_id: str, secret: str) -> str:
    return f"{session_id}.{_digest(session_id, secret)}"


def unsign(value: Optional[str], secret: str) -> Optional[str]:
    """Session id from a signed cookie value, None if missing or tampered with."""
    if not value:
        return None
    session_id, _, digest = value.rpartition(".")
    if not session_id or not hmac.compare_digest(digest, _digest(session_id, secret)):
        return None
    return session_id
