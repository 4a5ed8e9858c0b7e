"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from domain.services.bookmark_service import BookmarkService
from domain.services.owner_locks import OwnerLocks
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.metadata.http_fetcher import HttpMetadataFetcher


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_owner_locks() -> OwnerLocks:
    """Get the process-wide per-owner lock registry."""
    return OwnerLocks()


@lru_cache
def get_metadata_fetcher() -> HttpMetadataFetcher:
    """Get the metadata fetcher used for bookmark enrichment."""
    return HttpMetadataFetcher()


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory(), owner_locks=get_owner_locks())


@lru_cache
def get_bookmark_service() -> BookmarkService:
    """Get Bookmark service instance."""
    return BookmarkService(get_uow_factory(), metadata_fetcher=get_metadata_fetcher())
