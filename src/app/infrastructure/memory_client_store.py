"""
In-memory client store.

Keeps clients in a dict, primarily for development and testing. Every
operation completes without yielding to the event loop, so each one is atomic
with respect to other coroutines.
"""
import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

from src.app.core.domain.models import Client
from src.shared.exceptions import EntityNotFound, PersistenceError

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class InMemoryClientStore:
    """Dict-backed client store enforcing tax ID and email uniqueness."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        """
        Args:
            clock: Source of timestamps, UTC-aware
        """
        self.clock = clock
        self._clients: dict[UUID, Client] = {}
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """
        Serialize a guarded read-then-write sequence against other transactions.

        Writes are applied immediately and are not rolled back on error.
        """
        async with self._lock:
            yield

    async def insert(self, client: Client) -> Client:
        self._check_unique(client)
        now = self.clock()
        stored = client.model_copy(update={"id": uuid4(), "created_at": now, "updated_at": now})
        self._clients[stored.id] = stored
        return stored

    async def find_by_id(self, client_id: UUID) -> Client | None:
        return self._clients.get(client_id)

    async def find_by_tax_id(self, tax_id: str) -> Client | None:
        return next((c for c in self._clients.values() if c.tax_id == tax_id), None)

    async def find_by_email(self, email: str) -> Client | None:
        return next((c for c in self._clients.values() if c.email == email), None)

    async def find_all(self) -> list[Client]:
        # dicts keep insertion order, which is creation order
        return list(self._clients.values())

    async def search_by_name_pattern(self, fragment: str) -> list[Client]:
        needle = fragment.casefold()
        return [
            c for c in self._clients.values()
            if needle in c.first_name.casefold()
            or needle in c.last_name.casefold()
            or needle in c.company_name.casefold()
        ]

    async def save(self, client: Client) -> Client:
        existing = self._clients.get(client.id)
        if existing is None:
            raise EntityNotFound("Client", client.id)
        self._check_unique(client)
        stored = client.model_copy(update={
            "created_at": existing.created_at,
            "updated_at": max(self.clock(), existing.updated_at),
        })
        self._clients[stored.id] = stored
        return stored

    async def delete_by_id(self, client_id: UUID) -> bool:
        return self._clients.pop(client_id, None) is not None

    def _check_unique(self, client: Client) -> None:
        for other in self._clients.values():
            if other.id == client.id:
                continue
            if other.tax_id == client.tax_id or other.email == client.email:
                logger.warning("Write rejected, unique value already stored by client %s", other.id)
                raise PersistenceError("Client write violated a uniqueness constraint")
