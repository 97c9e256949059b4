"""UserRepository lookups and whitelisted updates."""

from __future__ import annotations

import pytest
from app.models.user import UserStatus
from app.repositories.user import UserRepository
from tests.factories.user import UserFactory


@pytest.fixture
def repo(session) -> UserRepository:
    return UserRepository(session=session)


def test_get_by_email_is_case_insensitive(repo):
    user = UserFactory(email="case@example.com")

    assert repo.get_by_email("  CASE@example.com") is user
    assert repo.get_by_email("other@example.com") is None


def test_nickname_taken(repo):
    UserFactory(nickname="bori")

    assert repo.nickname_taken("bori") is True
    assert repo.nickname_taken(" bori ") is True
    assert repo.nickname_taken("coco") is False


def test_update_whitelisted_fields(repo):
    user = UserFactory(status=UserStatus.REGISTER, nickname=None)

    repo.update(user, nickname="coco", status=UserStatus.ACTIVE)

    assert repo.get(user.id).nickname == "coco"


def test_update_rejects_non_whitelisted_fields(repo):
    user = UserFactory()

    with pytest.raises(ValueError):
        repo.update(user, role="ADMIN")
