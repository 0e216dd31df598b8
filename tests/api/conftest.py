import pytest
from fastapi.testclient import TestClient

from app.application.options import OneTimeTokenOptions
from app.domain.entities import User
from app.main import create_app
from app.presentation.dependencies import (
    get_clock,
    get_one_time_token_options,
    get_sessions,
    get_verification_store,
)
from tests.fakes import FakeClock, FakeSessions, FakeVerificationStore


@pytest.fixture()
def app_and_deps():
    app = create_app()
    store = FakeVerificationStore()
    sessions = FakeSessions()
    clock = FakeClock()
    state = {"options": OneTimeTokenOptions()}

    app.dependency_overrides[get_verification_store] = lambda: store
    app.dependency_overrides[get_sessions] = lambda: sessions
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_one_time_token_options] = lambda: state["options"]

    try:
        yield app, store, sessions, clock, state
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, *_ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def signed_in(app_and_deps):
    """Seed a session the way the auth layer would and return its token."""
    _, _, sessions, _, _ = app_and_deps
    current = sessions.seed(User(id="auth-1", email="login@test.local", name="Login"))
    return current


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
