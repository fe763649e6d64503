# ABOUTME: Call contracts for the hosted backend collaborators.
# ABOUTME: Flows depend on these protocols only, so any backend client can be plugged in.

from typing import Any, Protocol

Row = dict[str, Any]
Filters = dict[str, Any]


class DataStore(Protocol):
    """Row-level access keyed by table name and equality filters.

    A filter value that is a list or tuple matches any of its members.
    Every method raises DataStoreError on rejection.
    """

    async def insert(self, table: str, values: Row) -> Row: ...

    async def update(self, table: str, values: Row, filters: Filters) -> list[Row]: ...

    async def delete(self, table: str, filters: Filters) -> int: ...

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        ilike: Filters | None = None,
    ) -> list[Row]: ...


class ObjectStorage(Protocol):
    """Upload-by-path and public URL lookup."""

    async def upload(self, path: str, data: bytes, *, upsert: bool = False) -> None: ...

    def public_url(self, path: str) -> str: ...


class AuthProvider(Protocol):
    """Identity of the current user."""

    def current_user_id(self) -> str | None: ...

    def sign_in(self, user_id: str) -> None: ...

    def sign_out(self) -> None: ...
