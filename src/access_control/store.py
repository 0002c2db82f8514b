"""Database point reads backing identity and ownership resolution.

Both reads are single-row lookups against tables this app does not own. Any
connection-level failure is re-raised as ``StoreUnavailable`` so callers can
tell an outage apart from "no such row".
"""

import logging

from django.db import DEFAULT_DB_ALIAS, InterfaceError, OperationalError, connections

from authentication.models import User
from .exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


class DatabaseStore:
    """Read owner ids through the Django connection named by ``using``."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self.using = using

    def find_user_id(self, normalized_email: str) -> int | None:
        """Return the id of the non-deleted user whose trimmed, lower-cased email matches."""
        try:
            return (
                User.objects.using(self.using)
                .alive()
                .with_email(normalized_email)
                .order_by("pk")
                .values_list("pk", flat=True)
                .first()
            )
        except (OperationalError, InterfaceError) as exc:
            raise StoreUnavailable("Database unavailable while resolving identity") from exc

    def fetch_owner_id(self, locator):
        """Read ``locator.owner_column`` for one row by primary key; None if absent.

        Column and table names are quoted, not validated. SQLite reads a quoted
        unknown column as a string literal, which never compares as an owner id.
        """
        connection = connections[self.using]
        quote = connection.ops.quote_name
        sql = (
            f"SELECT {quote(locator.owner_column)} FROM {quote(locator.table)} "
            f"WHERE {quote(locator.id_column)} = %s"
        )
        try:
            with connection.cursor() as cursor:
                cursor.execute(sql, [locator.resource_id])
                row = cursor.fetchone()
        except (OperationalError, InterfaceError) as exc:
            raise StoreUnavailable(f"Database unavailable while reading owner of {locator.table}") from exc

        if row is None:
            logger.debug("No %s row with %s=%s", locator.table, locator.id_column, locator.resource_id)
            return None
        return row[0]


__all__ = ["DatabaseStore"]
