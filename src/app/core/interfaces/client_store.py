"""Persistence contract required by the client registry."""
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from src.app.core.domain.models import Client


@runtime_checkable
class ClientStore(Protocol):
    """
    Storage operations the registry relies on.

    Implementations enforce tax id and email uniqueness atomically and raise
    ``PersistenceError`` when a write would break it.
    """

    async def insert(self, client: Client) -> Client:
        """Persist a new client, assigning its ID and both timestamps."""
        ...

    async def find_by_id(self, client_id: UUID) -> Client | None:
        ...

    async def find_by_tax_id(self, tax_id: str) -> Client | None:
        ...

    async def find_by_email(self, email: str) -> Client | None:
        ...

    async def find_all(self) -> list[Client]:
        """Return every client in creation order."""
        ...

    async def search_by_name_pattern(self, fragment: str) -> list[Client]:
        """Case-insensitive substring match on first, last and company name."""
        ...

    async def save(self, client: Client) -> Client:
        """Write the mutable fields of an existing client and refresh ``updated_at``."""
        ...

    async def delete_by_id(self, client_id: UUID) -> bool:
        """Remove a client, returning False when nothing matched."""
        ...


@runtime_checkable
class TransactionalClientStore(ClientStore, Protocol):
    """A store that can run a guarded read-then-write sequence as one unit."""

    def transaction(self) -> AbstractAsyncContextManager[Any]:
        ...
