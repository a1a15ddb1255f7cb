"""Bearer API key authentication."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from squadz.domain.sessions import MemberSession  # noqa: TC001

if TYPE_CHECKING:
    from squadz.containers import AppContainer

_BEARER_PREFIX = "Bearer "


def extract_api_key(authorization: str | None) -> str | None:
    """Return the API key from an ``Authorization: Bearer`` header value."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        return None
    api_key = authorization.removeprefix(_BEARER_PREFIX).strip()
    return api_key or None


async def require_session(
    request: Request,
    authorization: str | None = Header(default=None),
) -> MemberSession:
    """Resolve the calling member's session or reject the request."""
    api_key = extract_api_key(authorization)
    if api_key is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    container: AppContainer = request.app.state.container
    session = container.session_store.validate(api_key)
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return session
