"""Squad membership and location endpoints."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from squadz.api.auth import require_session
from squadz.api.models import (
    CreateSquadRequest,
    CreateSquadResponse,
    JoinSquadRequest,
    JoinSquadResponse,
    MemberLocationResponse,
    SquadLocationsResponse,
    SquadResponse,
    UpdateLocationRequest,
)
from squadz.domain.errors import SquadNotFoundError
from squadz.domain.sessions import MemberSession  # noqa: TC001

if TYPE_CHECKING:
    from squadz.containers import AppContainer

router = APIRouter(prefix="/api/v1", tags=["squads"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _require_same_squad(session: MemberSession, squad_id: UUID) -> None:
    if session.squad_id != squad_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Session does not belong to this squad",
        )


@router.post("/squads")
async def create_squad(
    payload: CreateSquadRequest, request: Request
) -> CreateSquadResponse:
    """Create a squad and return the leader's credentials."""
    enrollment = _container(request).membership_service.create_squad(
        payload.name,
        payload.leader_name,
        payload.settings.to_domain() if payload.settings else None,
    )
    return CreateSquadResponse(
        squad_id=enrollment.squad.squad_id,
        join_code=enrollment.squad.join_code,
        member_id=enrollment.member_id,
        api_key=enrollment.session.api_key,
    )


@router.get("/squads")
async def list_squads(request: Request) -> list[SquadResponse]:
    """Return every live squad."""
    squads = _container(request).squad_registry.list_squads()
    return [SquadResponse.from_domain(squad) for squad in squads]


@router.get("/squads/{squad_id}")
async def get_squad(squad_id: UUID, request: Request) -> SquadResponse:
    """Return a single squad."""
    squad = _container(request).squad_registry.get_squad(squad_id)
    if squad is None:
        raise SquadNotFoundError
    return SquadResponse.from_domain(squad)


@router.post("/squads/{squad_id}/join")
async def join_squad(
    squad_id: UUID, payload: JoinSquadRequest, request: Request
) -> JoinSquadResponse:
    """Join a squad with its join code."""
    enrollment = _container(request).membership_service.join_squad(
        squad_id, payload.join_code, payload.display_name
    )
    return JoinSquadResponse(
        member_id=enrollment.member_id,
        squad=SquadResponse.from_domain(enrollment.squad),
        api_key=enrollment.session.api_key,
    )


@router.post("/squads/{squad_id}/leave", status_code=status.HTTP_204_NO_CONTENT)
async def leave_squad(
    squad_id: UUID,
    request: Request,
    session: MemberSession = Depends(require_session),
) -> Response:
    """Leave a squad as the authenticated member."""
    _require_same_squad(session, squad_id)
    _container(request).membership_service.leave_squad(squad_id, session.member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/squads/{squad_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_squad(
    squad_id: UUID,
    request: Request,
    session: MemberSession = Depends(require_session),
) -> Response:
    """Delete a squad; only its leader may do so."""
    _require_same_squad(session, squad_id)
    _container(request).membership_service.delete_squad(squad_id, session.member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/locations")
async def update_location(
    payload: UpdateLocationRequest,
    request: Request,
    session: MemberSession = Depends(require_session),
) -> dict[str, str]:
    """Record the authenticated member's current location."""
    _container(request).membership_service.update_location(
        session, payload.location.to_domain()
    )
    return {"status": "ok"}


@router.get("/squads/{squad_id}/locations")
async def get_squad_locations(
    squad_id: UUID, request: Request
) -> SquadLocationsResponse:
    """Return every known member location for a squad."""
    squad, locations = _container(request).membership_service.squad_locations(
        squad_id
    )
    return SquadLocationsResponse(
        squad_id=squad.squad_id,
        squad_name=squad.name,
        locations=[MemberLocationResponse.from_domain(loc) for loc in locations],
        updated_at=datetime.now(tz=UTC),
    )
