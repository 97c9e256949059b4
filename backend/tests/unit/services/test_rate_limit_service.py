"""RateLimitService on top of the Redis store (fakeredis)."""

from __future__ import annotations

from datetime import timedelta

import fakeredis
import pytest
from app.infra.redis.redis_rate_limit_store import RedisRateLimitStore
from app.services._shared.errors import RateLimitedError
from app.services.rate_limit.service import RateLimitPolicy, RateLimitService

IP = "203.0.113.7"


@pytest.fixture
def store():
    return RedisRateLimitStore(fakeredis.FakeRedis())


@pytest.fixture
def limiter(store):
    return RateLimitService(store=store, policy=RateLimitPolicy())


def test_policy_from_config(app):
    policy = RateLimitPolicy.from_config(app.config)

    assert policy.threshold == 5
    assert policy.window == timedelta(seconds=60)
    assert policy.ban == timedelta(minutes=10)


def test_attempts_below_threshold_pass(limiter, store):
    for _ in range(4):
        limiter.check_and_enforce(IP)

    assert store.attempts(IP) == 4
    assert limiter.is_banned(IP) is False


def test_threshold_attempt_bans_and_is_rejected(limiter, store):
    for _ in range(4):
        limiter.check_and_enforce(IP)

    with pytest.raises(RateLimitedError):
        limiter.check_and_enforce(IP)

    assert limiter.is_banned(IP) is True
    assert store.attempts(IP) is None  # ban clears the counter


def test_banned_ip_is_rejected_without_counting(limiter, store):
    limiter.ban(IP)

    with pytest.raises(RateLimitedError):
        limiter.check_and_enforce(IP)

    assert store.attempts(IP) is None


def test_other_ips_are_unaffected(limiter):
    limiter.ban(IP)

    limiter.check_and_enforce("198.51.100.1")


def test_email_cooldown_and_codes_use_policy_durations(limiter, store):
    limiter.set_email_cooldown("a@example.com")
    limiter.save_verification_code("a@example.com", "000123")

    assert limiter.email_cooldown_active("a@example.com") is True
    assert limiter.get_verification_code("a@example.com") == "000123"
    assert 0 < store.r.ttl("auth_code:a@example.com") <= 300

    limiter.delete_verification_code("a@example.com")
    limiter.clear_email_cooldown("a@example.com")
    assert limiter.get_verification_code("a@example.com") is None
    assert limiter.email_cooldown_active("a@example.com") is False
