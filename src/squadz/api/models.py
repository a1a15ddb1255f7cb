"""Pydantic request and response models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from squadz.domain.locations import GeoPoint, MemberLocation
from squadz.domain.squads import Member, Squad, SquadSettings


class GeoPointPayload(BaseModel):
    """Coordinates as sent and returned by clients."""

    latitude: float
    longitude: float
    altitude: float | None = None
    accuracy: float | None = None
    heading: float | None = None
    speed: float | None = None

    def to_domain(self) -> GeoPoint:
        return GeoPoint(**self.model_dump())

    @classmethod
    def from_domain(cls, point: GeoPoint) -> "GeoPointPayload":
        return cls(
            latitude=point.latitude,
            longitude=point.longitude,
            altitude=point.altitude,
            accuracy=point.accuracy,
            heading=point.heading,
            speed=point.speed,
        )


class SquadSettingsPayload(BaseModel):
    """Squad settings payload."""

    is_public: bool = False
    require_approval: bool = False
    share_altitude: bool = True
    share_speed: bool = True
    location_update_interval_secs: int = 10

    def to_domain(self) -> SquadSettings:
        return SquadSettings(**self.model_dump())

    @classmethod
    def from_domain(cls, settings: SquadSettings) -> "SquadSettingsPayload":
        return cls(
            is_public=settings.is_public,
            require_approval=settings.require_approval,
            share_altitude=settings.share_altitude,
            share_speed=settings.share_speed,
            location_update_interval_secs=settings.location_update_interval_secs,
        )


class MemberResponse(BaseModel):
    """Squad member payload."""

    member_id: UUID
    display_name: str
    avatar_url: str | None = None
    joined_at: datetime
    is_leader: bool

    @classmethod
    def from_domain(cls, member: Member) -> "MemberResponse":
        return cls(
            member_id=member.member_id,
            display_name=member.display_name,
            avatar_url=member.avatar_url,
            joined_at=member.joined_at,
            is_leader=member.is_leader,
        )


class SquadResponse(BaseModel):
    """Squad payload."""

    squad_id: UUID
    name: str
    join_code: str
    created_at: datetime
    leader_id: UUID
    members: list[MemberResponse]
    settings: SquadSettingsPayload

    @classmethod
    def from_domain(cls, squad: Squad) -> "SquadResponse":
        return cls(
            squad_id=squad.squad_id,
            name=squad.name,
            join_code=squad.join_code,
            created_at=squad.created_at,
            leader_id=squad.leader_id,
            members=[MemberResponse.from_domain(m) for m in squad.members],
            settings=SquadSettingsPayload.from_domain(squad.settings),
        )


class CreateSquadRequest(BaseModel):
    """Request to create a new squad."""

    name: str
    leader_name: str
    settings: SquadSettingsPayload | None = None


class CreateSquadResponse(BaseModel):
    """Response after creating a squad."""

    squad_id: UUID
    join_code: str
    member_id: UUID
    api_key: str


class JoinSquadRequest(BaseModel):
    """Request to join a squad."""

    join_code: str
    display_name: str


class JoinSquadResponse(BaseModel):
    """Response after joining a squad."""

    member_id: UUID
    squad: SquadResponse
    api_key: str


class UpdateLocationRequest(BaseModel):
    """Location update for the authenticated member."""

    location: GeoPointPayload


class MemberLocationResponse(BaseModel):
    """A member's last known location."""

    member_id: UUID
    display_name: str
    location: GeoPointPayload
    updated_at: datetime
    is_stale: bool

    @classmethod
    def from_domain(cls, location: MemberLocation) -> "MemberLocationResponse":
        return cls(
            member_id=location.member_id,
            display_name=location.display_name,
            location=GeoPointPayload.from_domain(location.location),
            updated_at=location.updated_at,
            is_stale=location.is_stale,
        )


class SquadLocationsResponse(BaseModel):
    """All known member locations for a squad."""

    squad_id: UUID
    squad_name: str
    locations: list[MemberLocationResponse]
    updated_at: datetime
