"""SQLAlchemy Unit of Work implementation."""

from types import TracebackType
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_bookmark_repo import SQLAlchemyBookmarkRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import SQLAlchemyProfileRepository


class SQLAlchemyUnitOfWork:
    """One session, one transaction, shared by both repositories.

    Nothing is persisted until ``commit``. Leaving the block without
    committing, or with an exception, rolls the transaction back.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._profiles: Optional[SQLAlchemyProfileRepository] = None
        self._bookmarks: Optional[SQLAlchemyBookmarkRepository] = None

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        if self._profiles is None:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._profiles

    @property
    def bookmarks(self) -> SQLAlchemyBookmarkRepository:
        if self._bookmarks is None:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._bookmarks

    async def commit(self) -> None:
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        self._session = self._session_factory()
        self._profiles = SQLAlchemyProfileRepository(self._session)
        self._bookmarks = SQLAlchemyBookmarkRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        session, self._session = self._session, None
        self._profiles = self._bookmarks = None
        if session is None:
            return
        try:
            if exc_type is not None:
                await session.rollback()
        finally:
            # Closing also discards anything left uncommitted.
            await session.close()
