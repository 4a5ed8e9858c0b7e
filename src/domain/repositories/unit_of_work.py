"""Unit of Work protocol."""

from types import TracebackType
from typing import Optional, Protocol

from domain.repositories.bookmark_repository import IBookmarkRepository
from domain.repositories.profile_repository import IProfileRepository


class IUnitOfWork(Protocol):
    """Transaction boundary around the profile and bookmark repositories.

    Used as ``async with uow_factory() as uow``. Writes made through either
    repository become visible together on ``commit`` or not at all.
    """

    profiles: IProfileRepository
    bookmarks: IBookmarkRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None: ...
