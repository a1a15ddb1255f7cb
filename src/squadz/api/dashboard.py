"""Password-protected read-only dashboard of squads and locations."""

from __future__ import annotations

import secrets
from html import escape
from typing import TYPE_CHECKING
from urllib.parse import quote

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

if TYPE_CHECKING:
    from squadz.domain.locations import MemberLocation
    from squadz.domain.squads import Squad

router = APIRouter(tags=["dashboard"])


@router.get("/", response_class=HTMLResponse)
async def dashboard_page(
    request: Request, password: str | None = None
) -> HTMLResponse:
    """Render every squad with its members and their last known locations."""
    container = request.app.state.container
    if password is None or not secrets.compare_digest(
        password.encode(), container.dashboard_password.encode()
    ):
        return HTMLResponse(_LOGIN_HTML)
    squads = container.squad_registry.list_squads()
    sections = [
        _render_squad(
            squad, container.location_cache.get_squad_locations(squad.squad_id)
        )
        for squad in sorted(squads, key=lambda s: s.created_at)
    ]
    body = "\n".join(sections) or '<p class="muted">No active squads.</p>'
    return HTMLResponse(
        _DASHBOARD_HTML.format(
            squad_count=len(squads),
            session_count=container.session_store.count_live(),
            password=escape(quote(password, safe="")),
            body=body,
        )
    )


def _render_squad(squad: Squad, locations: list[MemberLocation]) -> str:
    by_member = {loc.member_id: loc for loc in locations}
    rows = []
    for member in squad.members:
        location = by_member.get(member.member_id)
        if location is None:
            position = '<span class="muted">no location yet</span>'
        else:
            status = "stale" if location.is_stale else "live"
            position = (
                f"{location.location.latitude:.5f}, "
                f"{location.location.longitude:.5f} "
                f'<span class="{status}">{status}</span> '
                f'<span class="muted">{location.updated_at:%H:%M:%S} UTC</span>'
            )
        role = " (leader)" if member.is_leader else ""
        rows.append(
            f"<tr><td>{escape(member.display_name)}{role}</td><td>{position}</td></tr>"
        )
    return (
        '<div class="squad">'
        f"<h2>{escape(squad.name)} <code>{escape(squad.join_code)}</code></h2>"
        f'<p class="muted">{len(squad.members)} members, created '
        f"{squad.created_at:%Y-%m-%d %H:%M} UTC</p>"
        f"<table>{''.join(rows)}</table>"
        "</div>"
    )


_STYLE = """
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem;
             background: #1a1a2e; color: #eee; }
      h1 { color: #4ade80; }
      .squad { background: #16213e; border-radius: 8px; padding: 1rem;
               margin-bottom: 1rem; }
      table { width: 100%; border-collapse: collapse; }
      td { padding: 0.3rem 0.5rem; border-top: 1px solid #0f3460; }
      .muted { color: #888; }
      .live { color: #4ade80; }
      .stale { color: #f59e0b; }
      input, button { padding: 0.4rem 0.8rem; }
"""

_LOGIN_HTML = f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Squadz Dashboard - Login</title>
    <style>{_STYLE}</style>
  </head>
  <body>
    <h1>Squadz Dashboard</h1>
    <p>Enter password to view squads</p>
    <form method="get" action="/">
      <input type="password" name="password" placeholder="Password" autofocus />
      <button type="submit">View</button>
    </form>
  </body>
</html>
"""

_DASHBOARD_HTML = (
    """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Squadz Dashboard</title>
    <style>"""
    + _STYLE.replace("{", "{{").replace("}", "}}")
    + """</style>
  </head>
  <body>
    <h1>Squadz Dashboard</h1>
    <p class="muted">{squad_count} squads, {session_count} active sessions.
      <a href="?password={password}">Refresh</a></p>
    {body}
  </body>
</html>
"""
)
