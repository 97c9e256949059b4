"""Model-level rules for :class:`User`."""

from __future__ import annotations

import uuid

import pytest
from app.models.user import User, UserRole, UserStatus
from sqlalchemy.exc import IntegrityError
from tests.factories.user import UserFactory


def test_defaults_and_uuid_primary_key(session):
    user = User(email="a@example.com")
    session.add(user)
    session.flush()

    assert isinstance(user.id, uuid.UUID)
    assert user.role == UserRole.USER
    assert user.status == UserStatus.REGISTER


def test_email_is_normalized():
    assert User(email="  MiXeD@Example.COM ").email == "mixed@example.com"


@pytest.mark.parametrize("bad", ["", "no-at-sign", "a@nodot"])
def test_invalid_email_is_rejected(bad):
    with pytest.raises(ValueError):
        User(email=bad)


def test_blank_nickname_is_rejected():
    with pytest.raises(ValueError):
        User(email="a@example.com", nickname="   ")


def test_email_is_unique(session):
    UserFactory(email="dup@example.com")
    with pytest.raises(IntegrityError):
        UserFactory(email="dup@example.com")


@pytest.mark.parametrize(
    ("status", "restricted"),
    [
        (UserStatus.ACTIVE, False),
        (UserStatus.REGISTER, False),
        (UserStatus.SUSPENDED, True),
        (UserStatus.DORMANT, True),
        (UserStatus.DELETED, True),
    ],
)
def test_restricted_statuses(status, restricted):
    assert status.is_restricted is restricted
