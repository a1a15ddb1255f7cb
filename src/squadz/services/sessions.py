"""Session store for member API keys."""

import base64
import logging
import secrets
import threading
from collections.abc import Callable
from dataclasses import replace
from datetime import timedelta
from uuid import UUID, uuid4

from squadz.clock import Clock, utcnow
from squadz.domain.sessions import MemberSession

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "sqz_"
API_KEY_BYTES = 32


def generate_api_key() -> str:
    """Return a fresh URL-safe bearer credential."""
    raw = secrets.token_bytes(API_KEY_BYTES)
    encoded = base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
    return f"{API_KEY_PREFIX}{encoded}"


class SessionStore:
    """Issues and validates member sessions keyed by API key.

    Every operation takes the same exclusive lock, since validation also
    refreshes ``last_seen``.
    """

    def __init__(self, clock: Clock = utcnow) -> None:
        self._sessions: dict[str, MemberSession] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def create(
        self, member_id: UUID, squad_id: UUID, ttl_seconds: int
    ) -> MemberSession:
        """Create a session that expires ``ttl_seconds`` from now."""
        now = self._clock()
        session = MemberSession(
            session_id=uuid4(),
            member_id=member_id,
            squad_id=squad_id,
            api_key=generate_api_key(),
            created_at=now,
            expires_at=now + timedelta(seconds=ttl_seconds),
            last_seen=now,
        )
        with self._lock:
            self._sessions[session.api_key] = session
        logger.debug("Created session %s for member %s", session.session_id, member_id)
        return session

    def validate(self, api_key: str) -> MemberSession | None:
        """Return the live session for an API key, evicting it once expired."""
        with self._lock:
            session = self._sessions.get(api_key)
            if session is None:
                return None
            now = self._clock()
            if session.is_expired(now):
                del self._sessions[api_key]
                return None
            session = replace(session, last_seen=now)
            self._sessions[api_key] = session
            return session

    def revoke(self, api_key: str) -> bool:
        """Remove one session and report whether it existed."""
        with self._lock:
            return self._sessions.pop(api_key, None) is not None

    def revoke_member(self, member_id: UUID) -> int:
        """Remove every session belonging to a member."""
        with self._lock:
            return self._remove_where(lambda s: s.member_id == member_id)

    def revoke_squad(self, squad_id: UUID) -> int:
        """Remove every session scoped to a squad."""
        with self._lock:
            return self._remove_where(lambda s: s.squad_id == squad_id)

    def cleanup_expired(self) -> int:
        """Remove all expired sessions and return how many were dropped."""
        now = self._clock()
        with self._lock:
            removed = self._remove_where(lambda s: s.is_expired(now))
        if removed:
            logger.info("Removed %s expired sessions", removed)
        return removed

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def count_live(self) -> int:
        """Count sessions that have not reached their expiry."""
        now = self._clock()
        with self._lock:
            return sum(1 for s in self._sessions.values() if not s.is_expired(now))

    def _remove_where(self, predicate: Callable[[MemberSession], bool]) -> int:
        doomed = [key for key, s in self._sessions.items() if predicate(s)]
        for key in doomed:
            del self._sessions[key]
        return len(doomed)
