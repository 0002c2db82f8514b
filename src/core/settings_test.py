"""Test settings: in-memory SQLite and no identity cache by default."""

from .settings import *  # noqa: F401,F403

SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
IDENTITY_TOKEN_KEY = SECRET_KEY
IDENTITY_TOKEN_AUDIENCE = None

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

IDENTITY_CACHE_TTL = 0
REDIS_URL = "redis://localhost:6379/15"
LOG_LEVEL = "WARNING"
LOGGING["loggers"]["access_control"]["level"] = LOG_LEVEL  # noqa: F405
