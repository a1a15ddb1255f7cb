"""Tests for the HTTP API."""

from uuid import uuid4

from fastapi.testclient import TestClient

from squadz.api.app import create_app, error_status
from squadz.api.auth import extract_api_key
from squadz.containers import AppContainer
from squadz.domain.errors import NotMemberError, SquadError, SquadNotFoundError


def _bearer(api_key: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


def _create(client: TestClient, name: str = "Alpha", leader: str = "Cap") -> dict:
    response = client.post(
        "/api/v1/squads", json={"name": name, "leader_name": leader}
    )
    assert response.status_code == 200
    return response.json()


def _join(client: TestClient, created: dict, name: str = "Rookie") -> dict:
    response = client.post(
        f"/api/v1/squads/{created['squad_id']}/join",
        json={"join_code": created["join_code"], "display_name": name},
    )
    assert response.status_code == 200
    return response.json()


def test_health(client: TestClient) -> None:
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_extract_api_key() -> None:
    assert extract_api_key("Bearer sqz_abc") == "sqz_abc"
    assert extract_api_key("Basic abc") is None
    assert extract_api_key("Bearer ") is None
    assert extract_api_key(None) is None


def test_error_status_falls_back_to_server_error() -> None:
    assert error_status(SquadNotFoundError()) == 404
    assert error_status(NotMemberError()) == 403
    assert error_status(SquadError()) == 500


def test_create_squad_returns_credentials(client: TestClient) -> None:
    created = _create(client)

    assert len(created["join_code"]) == 6
    assert created["api_key"].startswith("sqz_")

    squad = client.get(f"/api/v1/squads/{created['squad_id']}").json()
    assert squad["name"] == "Alpha"
    assert squad["leader_id"] == created["member_id"]
    assert squad["members"][0]["is_leader"] is True
    assert squad["settings"]["location_update_interval_secs"] == 10


def test_create_squad_with_settings(client: TestClient) -> None:
    response = client.post(
        "/api/v1/squads",
        json={
            "name": "Alpha",
            "leader_name": "Cap",
            "settings": {"is_public": True, "share_speed": False},
        },
    )
    squad_id = response.json()["squad_id"]

    settings = client.get(f"/api/v1/squads/{squad_id}").json()["settings"]
    assert settings["is_public"] is True
    assert settings["share_speed"] is False


def test_list_and_get_unknown_squad(client: TestClient) -> None:
    _create(client, "Alpha")
    _create(client, "Bravo")

    names = {squad["name"] for squad in client.get("/api/v1/squads").json()}
    assert names == {"Alpha", "Bravo"}

    response = client.get(f"/api/v1/squads/{uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"detail": "Squad not found"}


def test_join_squad(client: TestClient) -> None:
    created = _create(client)

    joined = _join(client, created)

    assert joined["api_key"].startswith("sqz_")
    members = joined["squad"]["members"]
    assert [m["display_name"] for m in members] == ["Cap", "Rookie"]
    assert members[1]["is_leader"] is False


def test_join_errors(client: TestClient) -> None:
    created = _create(client)
    other = _create(client, "Bravo")
    _join(client, created)
    url = f"/api/v1/squads/{created['squad_id']}/join"

    taken = client.post(
        url, json={"join_code": created["join_code"], "display_name": "Rookie"}
    )
    unknown = client.post(url, json={"join_code": "NOPE22", "display_name": "X"})
    mismatch = client.post(
        url, json={"join_code": other["join_code"], "display_name": "X"}
    )

    assert taken.status_code == 409
    assert unknown.status_code == 404
    assert mismatch.status_code == 400


def test_join_full_squad(client: TestClient) -> None:
    created = _create(client)
    for i in range(4):
        _join(client, created, f"member-{i}")

    response = client.post(
        f"/api/v1/squads/{created['squad_id']}/join",
        json={"join_code": created["join_code"], "display_name": "extra"},
    )

    assert response.status_code == 409


def test_location_update_requires_auth(client: TestClient) -> None:
    body = {"location": {"latitude": 1.0, "longitude": 2.0}}

    assert client.post("/api/v1/locations", json=body).status_code == 401
    response = client.post(
        "/api/v1/locations", json=body, headers=_bearer("sqz_bogus")
    )
    assert response.status_code == 401


def test_location_flow(client: TestClient) -> None:
    created = _create(client)
    joined = _join(client, created)

    response = client.post(
        "/api/v1/locations",
        json={"location": {"latitude": 1.0, "longitude": 2.0, "heading": 90.0}},
        headers=_bearer(joined["api_key"]),
    )
    assert response.status_code == 200

    data = client.get(f"/api/v1/squads/{created['squad_id']}/locations").json()
    assert data["squad_name"] == "Alpha"
    [location] = data["locations"]
    assert location["member_id"] == joined["member_id"]
    assert location["display_name"] == "Rookie"
    assert location["location"]["latitude"] == 1.0
    assert location["location"]["heading"] == 90.0
    assert location["is_stale"] is False


def test_locations_for_unknown_squad(client: TestClient) -> None:
    response = client.get(f"/api/v1/squads/{uuid4()}/locations")

    assert response.status_code == 404


def test_member_leave(client: TestClient) -> None:
    created = _create(client)
    joined = _join(client, created)

    response = client.post(
        f"/api/v1/squads/{created['squad_id']}/leave",
        headers=_bearer(joined["api_key"]),
    )

    assert response.status_code == 204
    squad = client.get(f"/api/v1/squads/{created['squad_id']}").json()
    assert [m["display_name"] for m in squad["members"]] == ["Cap"]
    again = client.post(
        f"/api/v1/squads/{created['squad_id']}/leave",
        headers=_bearer(joined["api_key"]),
    )
    assert again.status_code == 401


def test_leader_leave_removes_squad(client: TestClient) -> None:
    created = _create(client)
    joined = _join(client, created)

    response = client.post(
        f"/api/v1/squads/{created['squad_id']}/leave",
        headers=_bearer(created["api_key"]),
    )

    assert response.status_code == 204
    assert client.get(f"/api/v1/squads/{created['squad_id']}").status_code == 404
    rejoin = client.post(
        f"/api/v1/squads/{created['squad_id']}/join",
        json={"join_code": created["join_code"], "display_name": "Late"},
    )
    assert rejoin.status_code == 404
    location = client.post(
        "/api/v1/locations",
        json={"location": {"latitude": 1.0, "longitude": 2.0}},
        headers=_bearer(joined["api_key"]),
    )
    assert location.status_code == 401


def test_delete_squad_leader_only(client: TestClient) -> None:
    created = _create(client)
    joined = _join(client, created)
    url = f"/api/v1/squads/{created['squad_id']}"

    assert client.delete(url, headers=_bearer(joined["api_key"])).status_code == 403
    assert client.delete(url, headers=_bearer(created["api_key"])).status_code == 204
    assert client.get(url).status_code == 404


def test_session_from_other_squad_is_forbidden(client: TestClient) -> None:
    alpha = _create(client, "Alpha")
    bravo = _create(client, "Bravo")

    response = client.delete(
        f"/api/v1/squads/{alpha['squad_id']}", headers=_bearer(bravo["api_key"])
    )

    assert response.status_code == 403


def test_lifespan_starts_and_stops_cleanup(container: AppContainer) -> None:
    with TestClient(create_app(container)) as client:
        assert client.get("/api/v1/health").status_code == 200
        assert container.cleanup_scheduler._task is not None

    assert container.cleanup_scheduler._task is None


def test_cors_preflight_allows_any_origin(client: TestClient) -> None:
    response = client.options(
        "/api/v1/squads",
        headers={
            "Origin": "https://app.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_header_on_simple_request(client: TestClient) -> None:
    response = client.get("/api/v1/health", headers={"Origin": "https://app.example"})

    assert response.headers["access-control-allow-origin"] == "*"
