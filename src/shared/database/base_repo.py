import abc
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Generic, TypeVar, Optional

from sqlalchemy import Executable
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.base_mapper import BaseEntityMapper
from src.shared.database.database import Database
from src.shared.database.unit_of_work import UnitOfWork, current_unit_of_work


TEntity = TypeVar("TEntity")
TModel = TypeVar("TModel")


class BaseRepository(abc.ABC, Generic[TEntity, TModel]):
    def __init__(self, db: Database, mapper: BaseEntityMapper[TModel, TEntity]):
        self.db = db
        self.mapper = mapper

    def transaction(self) -> UnitOfWork:
        """Open a unit of work that every repository on this database joins."""
        return UnitOfWork(self.db)

    @asynccontextmanager
    async def reading(self) -> AsyncIterator[AsyncSession]:
        """Yield the active unit of work's session, or a short-lived one."""
        unit_of_work = current_unit_of_work(self.db)
        if unit_of_work is not None:
            yield unit_of_work.session
            return
        async with self.db.session_maker() as session:
            yield session

    @asynccontextmanager
    async def writing(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session for a write.

        Inside a unit of work the changes are flushed and left for the unit of
        work to commit; otherwise they are committed when the block exits.
        """
        unit_of_work = current_unit_of_work(self.db)
        if unit_of_work is not None:
            yield unit_of_work.session
            await unit_of_work.session.flush()
            return
        async with self.db.session_maker() as session:
            async with session.begin():
                yield session

    async def find_one(self, statement: Executable) -> Optional[TModel]:
        async with self.reading() as session:
            result = await session.execute(statement)
            entity = result.scalar_one_or_none()
            if entity is None:
                return None
            return self.mapper.to_model(entity)

    async def find_many(self, statement: Executable) -> list[TModel]:
        async with self.reading() as session:
            result = await session.execute(statement)
            entities = list(result.scalars().all())
            return [self.mapper.to_model(entity) for entity in entities]
