from contextvars import ContextVar, Token
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.database import Database


_active_unit_of_work: ContextVar[Optional["UnitOfWork"]] = ContextVar("active_unit_of_work", default=None)


def current_unit_of_work(db: Database) -> Optional["UnitOfWork"]:
    """Return the unit of work entered in the current task for ``db``, if any."""
    unit_of_work = _active_unit_of_work.get()
    if unit_of_work is not None and unit_of_work.db is db:
        return unit_of_work
    return None


class UnitOfWork:
    """
    Transactional scope over a single session.

    While entered, repositories bound to the same Database run their reads and
    writes on this session. Leaving the block commits, or rolls back when an
    exception escapes it.
    """

    def __init__(self, db: Database) -> None:
        self.db = db
        self.session: AsyncSession | None = None
        self._token: Token | None = None

    async def __aenter__(self):
        if _active_unit_of_work.get() is not None:
            raise RuntimeError("Nested units of work are not supported")
        self.session = self.db.session_maker()
        self._token = _active_unit_of_work.set(self)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            if self._token is not None:
                _active_unit_of_work.reset(self._token)
                self._token = None
            if self.session:
                await self.session.close()
                self.session = None

    async def commit(self):
        try:
            await self.session.commit()
        except Exception:
            await self.rollback()
            raise

    async def rollback(self):
        await self.session.rollback()
