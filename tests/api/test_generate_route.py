from app.application.options import OneTimeTokenOptions
from tests.api.conftest import bearer


def test_generate_route_happy_path(client, app_and_deps, signed_in):
    _, store, _, _, _ = app_and_deps

    r = client.get(
        "/v1/one-time-token/generate", headers=bearer(signed_in.session.token)
    )

    assert r.status_code == 200, r.text
    token = r.json()["token"]
    assert len(token) == 32
    assert len(store.created) == 1
    assert store.created[0].identifier == f"one-time-token:{token}"
    assert store.created[0].value == signed_in.session.token


def test_generate_route_accepts_session_cookie(client, app_and_deps, signed_in):
    r = client.get(
        "/v1/one-time-token/generate",
        headers={"Cookie": f"session_token={signed_in.session.token}"},
    )

    assert r.status_code == 200, r.text
    assert r.json()["token"]


def test_generate_route_requires_session(client):
    r = client.get("/v1/one-time-token/generate")
    assert r.status_code == 401
    assert r.json()["detail"] == "not authenticated"


def test_generate_route_unknown_session(client):
    r = client.get("/v1/one-time-token/generate", headers=bearer("nope"))
    assert r.status_code == 401
    assert r.json()["detail"] == "invalid or expired session"


def test_generate_route_forbidden_when_client_requests_disabled(
    client, app_and_deps, signed_in
):
    _, store, _, _, state = app_and_deps
    state["options"] = OneTimeTokenOptions(disable_client_request=True)

    r = client.get(
        "/v1/one-time-token/generate", headers=bearer(signed_in.session.token)
    )

    assert r.status_code == 403
    assert r.json()["detail"] == "client requests are disabled"
    assert store.created == []
