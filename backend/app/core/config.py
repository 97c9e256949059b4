"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: int
        Value returned when the variable is unset or blank.

    Returns
    -------
    int
        Parsed integer value.

    Raises
    ------
    ValueError
        If the variable is set to something that is not an integer.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val.strip())


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing. Defaults to a development-safe
        placeholder and should be overridden in production.
    JWT_SECRET_KEY: str
        HMAC key used by ``flask-jwt-extended`` for signing every session token.
    JWT_ALGORITHM: str
        Signing algorithm; tokens signed with anything else are rejected.
    JWT_ACCESS_TOKEN_EXPIRES: timedelta
        Access token validity (1 hour).
    JWT_REFRESH_TOKEN_EXPIRES: timedelta
        Refresh token validity (14 days). Also the TTL of the stored refresh
        record.
    REGISTRATION_TOKEN_EXPIRES: timedelta
        Validity of the short-lived token handed to users that still have to
        complete their signup (30 minutes).
    REDIS_URL: str
        Connection string for the Redis instance holding sessions, blacklist
        entries and rate-limit counters.
    RATE_LIMIT_THRESHOLD: int
        Attempts per window after which an IP is banned.
    RATE_LIMIT_WINDOW_SECONDS: int
        Lifetime of an attempt counter, fixed by its first increment.
    RATE_LIMIT_BAN_SECONDS: int
        Ban duration applied when the threshold is reached.
    EMAIL_COOLDOWN_SECONDS: int
        Minimum spacing between two verification mails to the same address.
    VERIFICATION_CODE_TTL_SECONDS: int
        Lifetime of a mailed verification code.
    GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET / GOOGLE_REDIRECT_URI: str
        OAuth client registration for Google.
    NAVER_CLIENT_ID / NAVER_CLIENT_SECRET / NAVER_REDIRECT_URI / NAVER_STATE: str
        OAuth client registration for Naver.
    SOCIAL_HTTP_TIMEOUT_SECONDS: float
        Timeout applied to every call to a social provider.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    SQLALCHEMY_TRACK_MODIFICATIONS: bool
        Disabled to avoid extra overhead from the event system.
    SQLALCHEMY_ECHO: bool
        When ``True`` SQLAlchemy logs SQL statements for debugging.
    JSON_SORT_KEYS: bool
        Keeps JSON output order stable when ``False``.
    PROPAGATE_EXCEPTIONS: bool
        Controls Flask error propagation.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    USE_PROXYFIX: bool
        Trust one hop of ``X-Forwarded-*`` headers so ``remote_addr`` is the
        client address used by the rate limiter.
    PROXY_HOPS: int
        Number of trusted reverse proxies in front of the app.
    DEBUG: bool
        Toggles Flask debug mode.
    TESTING: bool
        Enables Flask testing mode when ``True``.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT_SECRET_AT_LEAST_32_BYTES")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(seconds=env_int("JWT_ACCESS_TOKEN_EXPIRES", 3600))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(
        seconds=env_int("JWT_REFRESH_TOKEN_EXPIRES", 14 * 24 * 3600)
    )
    REGISTRATION_TOKEN_EXPIRES = timedelta(seconds=env_int("REGISTRATION_TOKEN_EXPIRES", 1800))

    # Redis
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Rate limiting
    RATE_LIMIT_THRESHOLD = env_int("RATE_LIMIT_THRESHOLD", 5)
    RATE_LIMIT_WINDOW_SECONDS = env_int("RATE_LIMIT_WINDOW_SECONDS", 60)
    RATE_LIMIT_BAN_SECONDS = env_int("RATE_LIMIT_BAN_SECONDS", 600)
    EMAIL_COOLDOWN_SECONDS = env_int("EMAIL_COOLDOWN_SECONDS", 60)
    VERIFICATION_CODE_TTL_SECONDS = env_int("VERIFICATION_CODE_TTL_SECONDS", 300)

    # Social providers
    GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_REDIRECT_URI = os.getenv("GOOGLE_REDIRECT_URI", "")
    NAVER_CLIENT_ID = os.getenv("NAVER_CLIENT_ID", "")
    NAVER_CLIENT_SECRET = os.getenv("NAVER_CLIENT_SECRET", "")
    NAVER_REDIRECT_URI = os.getenv("NAVER_REDIRECT_URI", "")
    NAVER_STATE = os.getenv("NAVER_STATE", "")
    SOCIAL_HTTP_TIMEOUT_SECONDS = float(os.getenv("SOCIAL_HTTP_TIMEOUT_SECONDS", "5"))

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging, CORS & proxy
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXY_HOPS = env_int("PROXY_HOPS", 1)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Leaves ``REDIS_URL`` empty; tests inject a ``fakeredis`` client.
    - Stubs the social provider credentials so the registry is complete.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    PROPAGATE_EXCEPTIONS = False
    REDIS_URL = ""
    JWT_SECRET_KEY = "testing-secret-key-with-enough-entropy-000"
    GOOGLE_CLIENT_ID = "google-client"
    GOOGLE_CLIENT_SECRET = "google-secret"
    GOOGLE_REDIRECT_URI = "http://localhost/oauth/google"
    NAVER_CLIENT_ID = "naver-client"
    NAVER_CLIENT_SECRET = "naver-secret"
    NAVER_REDIRECT_URI = "http://localhost/oauth/naver"
    NAVER_STATE = "state"
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
