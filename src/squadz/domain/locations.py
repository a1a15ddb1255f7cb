"""Domain models for shared locations."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class GeoPoint:
    """Geographic coordinates reported by a device."""

    latitude: float
    longitude: float
    altitude: float | None = None
    accuracy: float | None = None
    heading: float | None = None
    speed: float | None = None


@dataclass(frozen=True)
class MemberLocation:
    """Last known location of a member, as seen at query time."""

    member_id: UUID
    display_name: str
    location: GeoPoint
    updated_at: datetime
    is_stale: bool
