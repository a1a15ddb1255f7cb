"""Domain models for member sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class MemberSession:
    """A bearer credential issued to a member of a squad."""

    session_id: UUID
    member_id: UUID
    squad_id: UUID
    api_key: str
    created_at: datetime
    expires_at: datetime
    last_seen: datetime

    def is_expired(self, now: datetime) -> bool:
        """Return True once ``now`` has reached the absolute expiry."""
        return now >= self.expires_at
