
def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_readyz_reports_redis_down(client, monkeypatch):
    async def _down() -> bool:
        return False

    monkeypatch.setattr("app.presentation.routes.health.redis_ready", _down)
    r = client.get("/readyz")
    assert r.status_code == 503
    assert r.json()["detail"] == "redis unavailable"


def test_readyz_ok(client, monkeypatch):
    async def _up() -> bool:
        return True

    monkeypatch.setattr("app.presentation.routes.health.redis_ready", _up)
    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.json() == {"status": "ready"}
