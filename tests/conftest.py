import pytest

from app.application.options import OneTimeTokenOptions
from app.domain.entities import User
from tests.fakes import (
    FakeClock,
    FakeErroredVerificationStore,
    FakeSessions,
    FakeSessionTransport,
    FakeVerificationStore,
)


@pytest.fixture()
def verification_store():
    return FakeVerificationStore()


@pytest.fixture()
def errored_store():
    return FakeErroredVerificationStore()


@pytest.fixture()
def sessions():
    return FakeSessions()


@pytest.fixture()
def transport():
    return FakeSessionTransport()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def options():
    return OneTimeTokenOptions()


@pytest.fixture()
def user():
    return User(id="u1", email=" Jeremy@Example.COM ", name="Jeremy")


@pytest.fixture()
def current_session(sessions, user):
    return sessions.seed(user)


@pytest.fixture()
def fixed_token(monkeypatch):
    """
    Make the default random token deterministic.
    Tests that need real randomness just don't request this fixture.
    """
    from app.domain import services as domain_services

    monkeypatch.setattr(
        domain_services, "generate_random_string", lambda length=32: "fixed-token-123"
    )
    return "fixed-token-123"
