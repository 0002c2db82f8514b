"""External identity claims and their resolution to internal owner records."""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import redis

logger = logging.getLogger(__name__)

DEFAULT_ROLE_CLAIM = "custom:role"


def _as_bool(value: Any) -> bool:
    # Identity providers often serialize booleans as "true"/"false" strings.
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


@dataclass(frozen=True)
class ExternalIdentity:
    """Claims of an already-authenticated caller, trusted as supplied.

    Exposes ``is_authenticated`` so DRF can use it as ``request.user``.
    """

    subject_id: str | None
    email: str | None
    role_claim: str | None
    email_verified: bool = False

    is_authenticated = True
    is_anonymous = False

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any], role_claim: str = DEFAULT_ROLE_CLAIM) -> "ExternalIdentity":
        """Build an identity from decoded token claims."""
        return cls(
            subject_id=claims.get("sub"),
            email=claims.get("email"),
            role_claim=claims.get(role_claim),
            email_verified=_as_bool(claims.get("email_verified", False)),
        )

    @property
    def pk(self) -> str | None:
        return self.subject_id


def normalize_email(email: str | None) -> str | None:
    """Trim then lower-case; blank input normalizes to None."""
    if not email:
        return None
    normalized = email.strip().lower()
    return normalized or None


class IdentityCache:
    """No-op cache; every lookup misses."""

    def get(self, normalized_email: str) -> int | None:
        return None

    def set(self, normalized_email: str, owner_id: int) -> None:
        return None

    def invalidate(self, normalized_email: str) -> None:
        return None


class RedisIdentityCache(IdentityCache):
    """Short-lived email -> owner id cache in Redis.

    Only positive hits are stored. Redis errors degrade to a cache miss: the
    cache speeds up resolution but never decides it.
    """

    PREFIX = "identity:owner:"

    def __init__(self, client: redis.Redis, ttl_seconds: int) -> None:
        self.client = client
        self.ttl_seconds = ttl_seconds

    def get(self, normalized_email: str) -> int | None:
        try:
            value = self.client.get(f"{self.PREFIX}{normalized_email}")
        except redis.RedisError:
            logger.warning("Identity cache read failed; falling back to the database", exc_info=True)
            return None
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Discarding malformed identity cache entry for %s", normalized_email)
            return None

    def set(self, normalized_email: str, owner_id: int) -> None:
        try:
            self.client.setex(f"{self.PREFIX}{normalized_email}", self.ttl_seconds, str(owner_id))
        except redis.RedisError:
            logger.warning("Identity cache write failed", exc_info=True)

    def invalidate(self, normalized_email: str) -> None:
        """Drop the cached owner id so the next lookup reads the database."""
        try:
            self.client.delete(f"{self.PREFIX}{normalized_email}")
        except redis.RedisError:
            # A stale entry expires with its TTL.
            logger.warning("Identity cache invalidation failed for %s", normalized_email, exc_info=True)


class IdentityResolver:
    """Resolve an email claim to the internal owner id of a live user row."""

    def __init__(self, store, cache: IdentityCache | None = None) -> None:
        self.store = store
        self.cache = cache or IdentityCache()

    def resolve_owner_id(self, email: str | None) -> int | None:
        """Return the owner id for ``email`` or None when no live user matches.

        Blank emails return None without touching the store. Store outages
        propagate as ``StoreUnavailable``.
        """
        normalized = normalize_email(email)
        if normalized is None:
            return None

        cached = self.cache.get(normalized)
        if cached is not None:
            return cached

        owner_id = self.store.find_user_id(normalized)
        if owner_id is None:
            logger.info("No active user matches identity email %s", normalized)
            return None

        self.cache.set(normalized, owner_id)
        return owner_id

    def forget(self, *emails: str | None) -> None:
        """Invalidate cached lookups for emails whose owner record changed."""
        for email in emails:
            normalized = normalize_email(email)
            if normalized is not None:
                self.cache.invalidate(normalized)


__all__ = [
    "ExternalIdentity",
    "IdentityCache",
    "IdentityResolver",
    "RedisIdentityCache",
    "normalize_email",
]
