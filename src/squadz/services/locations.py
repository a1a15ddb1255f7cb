"""Live location cache with read-time staleness."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from squadz.clock import Clock, utcnow
from squadz.domain.locations import GeoPoint, MemberLocation
from squadz.services.locking import ReadWriteLock

logger = logging.getLogger(__name__)

DEFAULT_LOCATION_TTL_SECS = 300


@dataclass
class _StoredLocation:
    member_id: UUID
    display_name: str
    location: GeoPoint
    updated_at: datetime


class LocationCache:
    """Most recent location per member, grouped by squad."""

    def __init__(
        self, ttl_seconds: int = DEFAULT_LOCATION_TTL_SECS, clock: Clock = utcnow
    ) -> None:
        self._locations: dict[UUID, dict[UUID, _StoredLocation]] = {}
        self._lock = ReadWriteLock()
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def update_location(
        self,
        squad_id: UUID,
        member_id: UUID,
        display_name: str,
        point: GeoPoint,
    ) -> None:
        """Insert or overwrite a member's location."""
        stored = _StoredLocation(
            member_id=member_id,
            display_name=display_name,
            location=point,
            updated_at=self._clock(),
        )
        with self._lock.write():
            self._locations.setdefault(squad_id, {})[member_id] = stored

    def get_squad_locations(self, squad_id: UUID) -> list[MemberLocation]:
        """Return every reported location in a squad, flagged stale past the TTL."""
        now = self._clock()
        with self._lock.read():
            stored = list(self._locations.get(squad_id, {}).values())
        return [
            MemberLocation(
                member_id=loc.member_id,
                display_name=loc.display_name,
                location=loc.location,
                updated_at=loc.updated_at,
                is_stale=now - loc.updated_at > self._ttl,
            )
            for loc in stored
        ]

    def remove_member(self, squad_id: UUID, member_id: UUID) -> None:
        with self._lock.write():
            squad_locations = self._locations.get(squad_id)
            if squad_locations is not None:
                squad_locations.pop(member_id, None)

    def remove_squad(self, squad_id: UUID) -> None:
        with self._lock.write():
            self._locations.pop(squad_id, None)

    def cleanup_stale(self) -> int:
        """Drop locations older than twice the TTL, then any empty squads."""
        cutoff = self._clock() - 2 * self._ttl
        removed = 0
        with self._lock.write():
            for squad_id in list(self._locations):
                squad_locations = self._locations[squad_id]
                for member_id in [
                    key
                    for key, loc in squad_locations.items()
                    if loc.updated_at < cutoff
                ]:
                    del squad_locations[member_id]
                    removed += 1
                if not squad_locations:
                    del self._locations[squad_id]
        if removed:
            logger.info("Removed %s stale locations", removed)
        return removed
