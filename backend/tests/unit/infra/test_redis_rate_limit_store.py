"""Unit tests for RedisRateLimitStore using fakeredis."""

from __future__ import annotations

from datetime import timedelta

import fakeredis
import pytest
from app.infra.redis.redis_rate_limit_store import RedisRateLimitStore

WINDOW = timedelta(seconds=60)


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis()


@pytest.fixture
def store(fake_redis):
    return RedisRateLimitStore(fake_redis)


def test_first_increment_sets_window_ttl(store, fake_redis):
    assert store.increment_attempts("1.2.3.4", WINDOW) == 1

    assert 0 < fake_redis.ttl("rate_limit:attempts:1.2.3.4") <= 60


def test_later_increments_do_not_reset_ttl(store, fake_redis):
    store.increment_attempts("1.2.3.4", WINDOW)
    fake_redis.expire("rate_limit:attempts:1.2.3.4", 10)

    assert store.increment_attempts("1.2.3.4", WINDOW) == 2
    assert fake_redis.ttl("rate_limit:attempts:1.2.3.4") <= 10


def test_ban_sets_marker_and_clears_counter(store, fake_redis):
    store.increment_attempts("1.2.3.4", WINDOW)

    store.ban("1.2.3.4", timedelta(minutes=10))

    assert store.is_banned("1.2.3.4") is True
    assert store.attempts("1.2.3.4") is None
    assert fake_redis.get("rate_limit:ban:1.2.3.4") == b"BANNED"
    assert 0 < fake_redis.ttl("rate_limit:ban:1.2.3.4") <= 600


def test_email_cooldown_lifecycle(store):
    assert store.email_cooldown_active("a@example.com") is False

    store.set_email_cooldown("a@example.com", timedelta(seconds=60))
    assert store.email_cooldown_active("a@example.com") is True

    store.clear_email_cooldown("a@example.com")
    assert store.email_cooldown_active("a@example.com") is False


def test_verification_code_lifecycle(store, fake_redis):
    store.save_verification_code("a@example.com", "123456", timedelta(minutes=5))

    assert store.get_verification_code("a@example.com") == "123456"
    assert 0 < fake_redis.ttl("auth_code:a@example.com") <= 300

    store.delete_verification_code("a@example.com")
    assert store.get_verification_code("a@example.com") is None
