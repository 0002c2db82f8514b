"""Ownership checks for ownership-gated actions."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class OwnershipQuery:
    """Locates one resource row and the column holding its owner id."""

    table: str
    id_column: str
    resource_id: Any
    owner_column: str = "owner_id"

    @classmethod
    def for_instance(cls, instance, owner_field: str = "owner") -> "OwnershipQuery":
        """Build a locator from a model instance using its table and pk column."""
        meta = instance._meta
        return cls(
            table=meta.db_table,
            id_column=meta.pk.column,
            resource_id=instance.pk,
            owner_column=meta.get_field(owner_field).column,
        )


def _as_int(value) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class OwnershipResolver:
    def __init__(self, store) -> None:
        self.store = store

    @staticmethod
    def is_owner(resource_owner_id, requesting_owner_id) -> bool:
        """Numeric equality of the two ids; None or non-numeric is never an owner."""
        owner = _as_int(resource_owner_id)
        requester = _as_int(requesting_owner_id)
        if owner is None or requester is None:
            return False
        return owner == requester

    def fetch_owner_id(self, locator: OwnershipQuery):
        """One point read of the resource's owner id; None if the row is absent.

        None does not mean "not found" to callers that need a 404; they confirm
        existence separately.
        """
        return self.store.fetch_owner_id(locator)


__all__ = ["OwnershipQuery", "OwnershipResolver"]
