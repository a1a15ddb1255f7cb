"""Squad registry: squads, membership, join codes and leadership."""

import logging
import secrets
from dataclasses import replace
from uuid import UUID, uuid4

from squadz.clock import Clock, utcnow
from squadz.domain.errors import (
    InvalidJoinCodeError,
    JoinCodeMismatchError,
    MemberNotFoundError,
    NameTakenError,
    NotLeaderError,
    SquadFullError,
    SquadNotFoundError,
)
from squadz.domain.squads import Member, Squad, SquadSettings
from squadz.services.locking import ReadWriteLock

logger = logging.getLogger(__name__)

# No 0/O or 1/I so codes survive being read aloud.
JOIN_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
JOIN_CODE_LENGTH = 6
MAX_JOIN_CODE_ATTEMPTS = 1000


def generate_join_code() -> str:
    """Return a random join code, without checking for collisions."""
    return "".join(
        secrets.choice(JOIN_CODE_ALPHABET) for _ in range(JOIN_CODE_LENGTH)
    )


class SquadRegistry:
    """Owns every squad and member record in the process."""

    def __init__(
        self, max_members: int | None = None, clock: Clock = utcnow
    ) -> None:
        self._squads: dict[UUID, Squad] = {}
        self._join_codes: dict[str, UUID] = {}
        self._lock = ReadWriteLock()
        self._max_members = max_members
        self._clock = clock

    def create_squad(
        self,
        name: str,
        leader_display_name: str,
        settings: SquadSettings | None = None,
    ) -> tuple[Squad, UUID]:
        """Create a squad led by a new member and return it with the leader id."""
        now = self._clock()
        squad_id = uuid4()
        leader_id = uuid4()
        leader = Member(
            member_id=leader_id,
            display_name=leader_display_name,
            joined_at=now,
            is_leader=True,
        )
        with self._lock.write():
            join_code = self._unique_join_code()
            squad = Squad(
                squad_id=squad_id,
                name=name,
                join_code=join_code,
                created_at=now,
                leader_id=leader_id,
                members=(leader,),
                settings=settings or SquadSettings(),
            )
            self._squads[squad_id] = squad
            self._join_codes[join_code] = squad_id
        logger.info("Created squad %s with join code %s", squad_id, join_code)
        return squad, leader_id

    def get_squad(self, squad_id: UUID) -> Squad | None:
        """Return a squad by id, if present."""
        with self._lock.read():
            return self._squads.get(squad_id)

    def get_squad_by_code(self, join_code: str) -> Squad | None:
        """Return the live squad owning a join code, if any."""
        with self._lock.read():
            squad_id = self._join_codes.get(join_code)
            if squad_id is None:
                return None
            return self._squads.get(squad_id)

    def list_squads(self) -> list[Squad]:
        """Return all live squads."""
        with self._lock.read():
            return list(self._squads.values())

    def join_squad(
        self,
        join_code: str,
        display_name: str,
        expected_squad_id: UUID | None = None,
    ) -> tuple[Squad, UUID]:
        """Add a non-leader member to the squad owning ``join_code``.

        When ``expected_squad_id`` is given, the code must belong to that squad.
        """
        with self._lock.write():
            squad_id = self._join_codes.get(join_code)
            if squad_id is None:
                raise InvalidJoinCodeError
            if expected_squad_id is not None and squad_id != expected_squad_id:
                raise JoinCodeMismatchError
            squad = self._squads.get(squad_id)
            if squad is None:
                raise SquadNotFoundError
            if any(m.display_name == display_name for m in squad.members):
                raise NameTakenError
            if (
                self._max_members is not None
                and len(squad.members) >= self._max_members
            ):
                raise SquadFullError
            member = Member(
                member_id=uuid4(),
                display_name=display_name,
                joined_at=self._clock(),
            )
            squad = replace(squad, members=(*squad.members, member))
            self._squads[squad_id] = squad
        logger.info("Member %s joined squad %s", member.member_id, squad_id)
        return squad, member.member_id

    def leave_squad(self, squad_id: UUID, member_id: UUID) -> None:
        """Remove a member; the whole squad goes away when the leader leaves."""
        with self._lock.write():
            squad = self._squads.get(squad_id)
            if squad is None:
                raise SquadNotFoundError
            member = squad.find_member(member_id)
            if member is None:
                raise MemberNotFoundError
            if member.is_leader:
                self._remove(squad)
                logger.info("Leader left; deleted squad %s", squad_id)
                return
            self._squads[squad_id] = replace(
                squad,
                members=tuple(m for m in squad.members if m.member_id != member_id),
            )
        logger.info("Member %s left squad %s", member_id, squad_id)

    def delete_squad(self, squad_id: UUID, requesting_member_id: UUID) -> None:
        """Delete a squad on behalf of its leader."""
        with self._lock.write():
            squad = self._squads.get(squad_id)
            if squad is None:
                raise SquadNotFoundError
            if squad.leader_id != requesting_member_id:
                raise NotLeaderError
            self._remove(squad)
        logger.info("Deleted squad %s", squad_id)

    def _remove(self, squad: Squad) -> None:
        self._squads.pop(squad.squad_id, None)
        self._join_codes.pop(squad.join_code, None)

    def _unique_join_code(self) -> str:
        for _ in range(MAX_JOIN_CODE_ATTEMPTS):
            code = generate_join_code()
            if code not in self._join_codes:
                return code
        raise RuntimeError("Could not allocate a unique join code")
