"""RegistrationService: signup completion starts the first session."""

from __future__ import annotations

import fakeredis
import pytest
from app.infra.redis.redis_rate_limit_store import RedisRateLimitStore
from app.models.user import UserStatus
from app.services._shared.errors import ConflictError, InvalidRequestError
from app.services._shared.ports import InMemoryRevocationStore, InMemorySessionStore
from app.services.auth.service import AuthService
from app.services.identity.service import IdentityDirectory
from app.services.rate_limit.service import RateLimitService
from app.services.registration.service import RegistrationService
from tests.factories.user import UserFactory
from tests.helpers.doubles import StubIdentityProvider, StubProviderRegistry


@pytest.fixture
def sessions():
    return InMemorySessionStore()


@pytest.fixture
def service(tokens, sessions) -> RegistrationService:
    users = IdentityDirectory()
    auth = AuthService(
        token_service=tokens,
        session_store=sessions,
        revocation_store=InMemoryRevocationStore(),
        rate_limiter=RateLimitService(store=RedisRateLimitStore(fakeredis.FakeRedis())),
        providers=StubProviderRegistry(StubIdentityProvider()),
        users=users,
    )
    return RegistrationService(users=users, auth=auth)


def test_complete_issues_stored_session(service, sessions, tokens, session):
    user = UserFactory(email="p@example.com", nickname=None, status=UserStatus.REGISTER)
    session.flush()

    pair = service.complete("p@example.com", "walkies")

    assert tokens.parse_principal(pair.access_token) == str(user.id)
    assert tokens.parse_role(pair.access_token) == "USER"
    assert sessions.find_by_value(pair.refresh_token).principal_id == str(user.id)


def test_complete_twice_is_rejected(service, session):
    UserFactory(email="p@example.com", nickname=None, status=UserStatus.REGISTER)
    session.flush()

    service.complete("p@example.com", "walkies")
    with pytest.raises(InvalidRequestError):
        service.complete("p@example.com", "walkies-2")


def test_nickname_conflict_starts_no_session(service, sessions, session):
    UserFactory(nickname="walkies")
    pending = UserFactory(email="p@example.com", nickname=None, status=UserStatus.REGISTER)
    session.flush()
    pending_id = str(pending.id)

    with pytest.raises(ConflictError):
        service.complete("p@example.com", "walkies")

    assert sessions.count_for(pending_id) == 0
