import logging
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID
from typing import Optional

from sqlalchemy import delete, literal, select, or_
from sqlalchemy.exc import IntegrityError

from src.app.core.domain.models import Client
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database
from src.shared.database.functions import casefold
from src.shared.exceptions import EntityNotFound, PersistenceError

from src.app.infrastructure.entities.client_entity import ClientEntity
from src.app.infrastructure.mappers.client_mapper import ClientMapper

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def escape_like(fragment: str) -> str:
    """Escape LIKE wildcards so the fragment is matched literally."""
    return (
        fragment.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class ClientRepository(BaseRepository[ClientEntity, Client]):
    """Repository for Client operations, backed by SQLAlchemy."""

    def __init__(self, db: Database, mapper: ClientMapper, clock: Callable[[], datetime] = _utc_now):
        super().__init__(db, mapper)
        self.clock = clock

    async def find_by_id(self, client_id: UUID) -> Optional[Client]:
        """Get a client by ID."""
        return await self.find_one(
            select(ClientEntity).where(ClientEntity.id == client_id)
        )

    async def find_by_tax_id(self, tax_id: str) -> Optional[Client]:
        """Get a client by tax ID."""
        return await self.find_one(
            select(ClientEntity).where(ClientEntity.tax_id == tax_id)
        )

    async def find_by_email(self, email: str) -> Optional[Client]:
        """Get a client by email."""
        return await self.find_one(
            select(ClientEntity).where(ClientEntity.email == email)
        )

    async def find_all(self) -> list[Client]:
        """Get every client, oldest first."""
        return await self.find_many(
            select(ClientEntity).order_by(ClientEntity.created_at, ClientEntity.id)
        )

    async def search_by_name_pattern(self, fragment: str) -> list[Client]:
        """
        Case-insensitive substring search across first, last and company name.

        Args:
            fragment: Text to look for. An empty fragment matches every client.

        Returns:
            Matching clients, oldest first
        """
        pattern = casefold(literal(f"%{escape_like(fragment)}%"))
        stmt = (
            select(ClientEntity)
            .where(
                or_(
                    casefold(ClientEntity.first_name).like(pattern, escape=LIKE_ESCAPE),
                    casefold(ClientEntity.last_name).like(pattern, escape=LIKE_ESCAPE),
                    casefold(ClientEntity.company_name).like(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(ClientEntity.created_at, ClientEntity.id)
        )
        return await self.find_many(stmt)

    async def insert(self, client: Client) -> Client:
        """Insert a new client. The database assigns its ID; both timestamps are set to now."""
        entity = self.mapper.to_entity(client)
        now = self.clock()
        entity.created_at = now
        entity.updated_at = now

        try:
            async with self.writing() as session:
                session.add(entity)
                await session.flush()
        except IntegrityError as e:
            logger.warning("Insert rejected by a database constraint: %s", e.orig)
            raise PersistenceError("Client insert violated a database constraint") from e

        return self.mapper.to_model(entity)

    async def save(self, client: Client) -> Client:
        """
        Write the mutable fields of an existing client.

        ``updated_at`` moves to now, never backwards; ``id`` and ``created_at`` are untouched.

        Raises:
            EntityNotFound: If the client was removed in the meantime
        """
        try:
            async with self.writing() as session:
                entity = await session.get(ClientEntity, client.id)
                if entity is None:
                    raise EntityNotFound("Client", client.id)
                self.mapper.copy_to_entity(client, entity)
                entity.updated_at = max(self.clock(), entity.updated_at)
                await session.flush()
        except IntegrityError as e:
            logger.warning("Update rejected by a database constraint: %s", e.orig)
            raise PersistenceError("Client update violated a database constraint") from e

        return self.mapper.to_model(entity)

    async def delete_by_id(self, client_id: UUID) -> bool:
        """Delete a client, returning whether a row was removed."""
        async with self.writing() as session:
            result = await session.execute(
                delete(ClientEntity).where(ClientEntity.id == client_id)
            )
            removed = result.rowcount > 0
        return removed
