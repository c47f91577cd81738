"""Business rules for creating, reading, updating and deleting clients."""
from contextlib import AbstractAsyncContextManager, nullcontext
from typing import Any
from uuid import UUID

from src.app.core.domain.models import Client, ClientPayload
from src.app.core.interfaces.client_store import ClientStore, TransactionalClientStore
from src.app.core.services.client_validator import ClientValidator
from src.app.core.services.uniqueness_guard import UniquenessGuard
from src.shared.exceptions import ConflictingEntityFound, EntityNotFound, EntityValidationFailed


ENTITY_NAME = "Client"


class ClientRegistry:
    """Service for handling Client business logic."""

    def __init__(
        self,
        store: ClientStore,
        validator: ClientValidator | None = None,
        guard: UniquenessGuard | None = None,
    ):
        """
        Initialize the registry.

        Args:
            store: Persistence for client records
            validator: Field rules, defaults to a ClientValidator on the system clock
            guard: Uniqueness checks, defaults to a guard over ``store``
        """
        self.store = store
        self.validator = validator or ClientValidator()
        self.guard = guard or UniquenessGuard(store)

    async def find_all(self) -> list[Client]:
        return await self.store.find_all()

    async def find_by_id(self, client_id: UUID) -> Client:
        """Get a client by ID."""
        client = await self.store.find_by_id(client_id)
        if client is None:
            raise EntityNotFound(ENTITY_NAME, client_id)
        return client

    async def search_by_name(self, fragment: str) -> list[Client]:
        """
        Find clients whose first, last or company name contains ``fragment``.

        Matching is case-insensitive. A blank fragment matches every client.
        """
        return await self.store.search_by_name_pattern(fragment.strip())

    async def create(self, payload: ClientPayload) -> Client:
        """
        Create a new client.

        Raises:
            EntityValidationFailed: If any field rule is violated
            ConflictingEntityFound: If the tax ID or email is already taken
        """
        self._ensure_valid(payload)

        async with self._transaction():
            await self._ensure_unique(payload)
            client = await self.store.insert(Client.from_payload(payload))

        return client

    async def update(self, client_id: UUID, payload: ClientPayload) -> Client:
        """
        Replace every mutable field of an existing client.

        ID and creation timestamp are kept; the store refreshes the
        modification timestamp.

        Raises:
            EntityNotFound: If no client has ``client_id``
            EntityValidationFailed: If any field rule is violated
            ConflictingEntityFound: If another client holds the tax ID or email
        """
        async with self._transaction():
            existing = await self.find_by_id(client_id)
            self._ensure_valid(payload)
            await self._ensure_unique(payload, exclude_id=client_id)
            updated = await self.store.save(existing.with_changes(payload))

        return updated

    async def delete(self, client_id: UUID) -> None:
        """
        Permanently remove a client.

        Raises:
            EntityNotFound: If no client has ``client_id``, including a repeated delete
        """
        if not await self.store.delete_by_id(client_id):
            raise EntityNotFound(ENTITY_NAME, client_id)

    def _ensure_valid(self, payload: ClientPayload) -> None:
        result = self.validator.validate(payload)
        if not result.is_valid:
            raise EntityValidationFailed(ENTITY_NAME, result.errors)

    async def _ensure_unique(self, payload: ClientPayload, exclude_id: UUID | None = None) -> None:
        conflict = await self.guard.check_conflicts(payload.tax_id, payload.email, exclude_id=exclude_id)
        if conflict is not None:
            raise ConflictingEntityFound(ENTITY_NAME, conflict.field, conflict.value)

    def _transaction(self) -> AbstractAsyncContextManager[Any]:
        # Without a transactional store the guard and the write can interleave
        # with other callers; the store's constraints catch what slips through.
        if isinstance(self.store, TransactionalClientStore):
            return self.store.transaction()
        return nullcontext()
