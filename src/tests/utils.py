"""Shared helpers for tests (fake Redis, spy store, users and API clients)."""

from __future__ import annotations

from typing import Dict

import redis
from rest_framework.test import APIClient

from access_control.catalog import Role
from access_control.identity import ExternalIdentity
from authentication.models import User
from authentication.services import TokenService


class FakeRedis:
    """Minimal Redis stub supporting the commands used by the identity cache."""

    def __init__(self, fail: bool = False):
        self._store: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}
        self.fail = fail

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Mimic Redis SETEX; TTL is recorded but not enforced."""
        if self.fail:
            raise redis.ConnectionError("fake redis is down")
        self._store[key] = value
        self.ttls[key] = ttl_seconds

    def get(self, key: str):
        """Return stored value for key or None, matching Redis GET semantics."""
        if self.fail:
            raise redis.ConnectionError("fake redis is down")
        return self._store.get(key)

    def delete(self, *keys: str) -> int:
        """Remove keys, returning how many existed."""
        if self.fail:
            raise redis.ConnectionError("fake redis is down")
        removed = 0
        for key in keys:
            if self._store.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed


class SpyStore:
    """In-memory store that records every read the authorization core makes."""

    def __init__(self, users: dict[str, int] | None = None, owners: dict | None = None):
        self.users = users or {}
        self.owners = owners or {}
        self.identity_reads: list[str] = []
        self.ownership_reads: list = []

    def find_user_id(self, normalized_email: str):
        self.identity_reads.append(normalized_email)
        return self.users.get(normalized_email)

    def fetch_owner_id(self, locator):
        self.ownership_reads.append(locator)
        return self.owners.get(locator.resource_id)


def identity(role: str | None, email: str | None = "actor@example.com", sub: str = "sub-1") -> ExternalIdentity:
    return ExternalIdentity(subject_id=sub, email=email, role_claim=role, email_verified=True)


def create_user(email: str, role: str = Role.VIEWER, **extra) -> User:
    """Create a live owner record for tests."""

    return User.objects.create(email=email, role=role, **extra)


def auth_client(email: str, role: str | None, sub: str | None = None) -> APIClient:
    """Return an APIClient carrying a fresh identity token for the given claims."""

    token = TokenService.issue_token(sub or f"sub-{email}", email, role)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client
