"""Membership flows that span the registry, sessions and locations."""

import logging
from dataclasses import dataclass
from uuid import UUID

from squadz.domain.errors import (
    NotMemberError,
    SquadNotFoundError,
)
from squadz.domain.locations import GeoPoint, MemberLocation
from squadz.domain.sessions import MemberSession
from squadz.domain.squads import Squad, SquadSettings
from squadz.services.locations import LocationCache
from squadz.services.sessions import SessionStore
from squadz.services.squads import SquadRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Enrollment:
    """A squad membership together with the session issued for it."""

    squad: Squad
    member_id: UUID
    session: MemberSession


@dataclass
class MembershipService:
    """Keeps sessions and locations in step with registry changes.

    Each store is locked on its own, so a concurrent reader may briefly see a
    deleted squad that still has sessions or locations.
    """

    registry: SquadRegistry
    sessions: SessionStore
    locations: LocationCache
    session_ttl_secs: int = 3600

    def create_squad(
        self,
        name: str,
        leader_name: str,
        settings: SquadSettings | None = None,
    ) -> Enrollment:
        """Create a squad and sign its leader in."""
        squad, leader_id = self.registry.create_squad(name, leader_name, settings)
        session = self.sessions.create(
            leader_id, squad.squad_id, self.session_ttl_secs
        )
        return Enrollment(squad=squad, member_id=leader_id, session=session)

    def join_squad(
        self, squad_id: UUID, join_code: str, display_name: str
    ) -> Enrollment:
        """Join the squad named by ``squad_id`` using its join code."""
        squad, member_id = self.registry.join_squad(
            join_code, display_name, expected_squad_id=squad_id
        )
        session = self.sessions.create(
            member_id, squad.squad_id, self.session_ttl_secs
        )
        return Enrollment(squad=squad, member_id=member_id, session=session)

    def leave_squad(self, squad_id: UUID, member_id: UUID) -> None:
        """Remove a member and drop their sessions and location."""
        self.registry.leave_squad(squad_id, member_id)
        if self.registry.get_squad(squad_id) is None:
            self._purge_squad(squad_id)
            return
        self.sessions.revoke_member(member_id)
        self.locations.remove_member(squad_id, member_id)

    def delete_squad(self, squad_id: UUID, member_id: UUID) -> None:
        """Delete a squad on behalf of its leader and purge its state."""
        self.registry.delete_squad(squad_id, member_id)
        self._purge_squad(squad_id)

    def update_location(self, session: MemberSession, point: GeoPoint) -> None:
        """Record a location for the member owning ``session``.

        Membership is checked again after the write; a member who left in the
        meantime has the location removed.
        """
        squad = self.registry.get_squad(session.squad_id)
        if squad is None:
            raise SquadNotFoundError
        member = squad.find_member(session.member_id)
        if member is None:
            raise NotMemberError
        self.locations.update_location(
            squad.squad_id, member.member_id, member.display_name, point
        )
        current = self.registry.get_squad(squad.squad_id)
        if current is None:
            self.locations.remove_squad(squad.squad_id)
            raise SquadNotFoundError
        if current.find_member(member.member_id) is None:
            self.locations.remove_member(squad.squad_id, member.member_id)
            raise NotMemberError

    def squad_locations(self, squad_id: UUID) -> tuple[Squad, list[MemberLocation]]:
        squad = self.registry.get_squad(squad_id)
        if squad is None:
            raise SquadNotFoundError
        return squad, self.locations.get_squad_locations(squad_id)

    def _purge_squad(self, squad_id: UUID) -> None:
        revoked = self.sessions.revoke_squad(squad_id)
        self.locations.remove_squad(squad_id)
        logger.info("Purged squad %s (%s sessions revoked)", squad_id, revoked)
