"""
Database Adapter Protocol.

The state store talks to the remote data store only through this
interface. In production it is the Supabase client itself; tests pass a
fake that records the query builder calls.

The surface is the PostgREST fluent builder used by supabase-py:
table() returns a builder supporting .select(), .insert(), .update(),
.delete(), .eq(), .order() and .execute().
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DatabaseAdapter(Protocol):
    """Row-level access to the user-scoped tables."""

    def table(self, name: str) -> Any:
        """
        Return a query builder for the given table.

        `.execute()` on the finished builder yields an object whose `.data`
        is the list of affected or selected rows.
        """
        ...
