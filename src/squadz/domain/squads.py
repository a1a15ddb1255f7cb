"""Domain models for squads and their members."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SquadSettings:
    """Per-squad sharing preferences."""

    is_public: bool = False
    require_approval: bool = False
    share_altitude: bool = True
    share_speed: bool = True
    location_update_interval_secs: int = 10


@dataclass(frozen=True)
class Member:
    """A member of a squad."""

    member_id: UUID
    display_name: str
    joined_at: datetime
    is_leader: bool = False
    avatar_url: str | None = None


@dataclass(frozen=True)
class Squad:
    """Snapshot of a squad and its current members."""

    squad_id: UUID
    name: str
    join_code: str
    created_at: datetime
    leader_id: UUID
    members: tuple[Member, ...]
    settings: SquadSettings = field(default_factory=SquadSettings)

    def find_member(self, member_id: UUID) -> Member | None:
        """Return the member with the given id, if present."""
        for member in self.members:
            if member.member_id == member_id:
                return member
        return None
