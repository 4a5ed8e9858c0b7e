"""Bookmark service layer with business logic."""

from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID

import structlog

from core.exceptions import BookmarkNotFoundError, ProfileNotFoundError
from domain.entities.bookmark import Bookmark
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.identity import require_user
from infrastructure.metadata.provider import IMetadataFetcher

logger = structlog.get_logger()


class BookmarkService:
    """Service layer for Bookmark business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        metadata_fetcher: IMetadataFetcher,
    ) -> None:
        self._uow_factory = uow_factory
        self._metadata_fetcher = metadata_fetcher

    async def get_all_for_profile(
        self, profile_id: UUID, user_id: Optional[UUID]
    ) -> List[Bookmark]:
        """Get a profile's bookmarks, most recently added first.

        Anonymous callers and profiles the caller does not own yield an
        empty list rather than an error.
        """
        if user_id is None:
            return []
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile or not profile.is_owned_by(user_id):
                return []
            return await uow.bookmarks.get_all_for_profile(profile_id)  # type: ignore[no-any-return]

    async def create(
        self,
        user_id: Optional[UUID],
        profile_id: UUID,
        url: str,
        title: str,
        description: Optional[str] = None,
        favicon: Optional[str] = None,
    ) -> Bookmark:
        """Store a bookmark in one of the caller's profiles."""
        owner_id = require_user(user_id)
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile or not profile.is_owned_by(owner_id):
                raise ProfileNotFoundError(str(profile_id))

            bookmark = Bookmark(
                user_id=profile.user_id,
                profile_id=profile.id,
                url=url,
                title=title,
                description=description,
                favicon=favicon,
                added_at=datetime.utcnow(),
            )
            created = await uow.bookmarks.create(bookmark)
            await uow.commit()
            return created  # type: ignore[no-any-return]

    async def add_with_metadata(
        self, user_id: Optional[UUID], profile_id: UUID, url: str
    ) -> Bookmark:
        """Enrich a bare URL with page metadata and store it.

        Fetch problems only cost the enrichment; storage errors propagate.
        """
        owner_id = require_user(user_id)
        metadata = await self._metadata_fetcher.fetch(url)
        logger.debug(
            "bookmark_metadata_resolved",
            url=metadata.url,
            has_description=bool(metadata.description),
        )
        return await self.create(
            owner_id,
            profile_id,
            url=metadata.url,
            title=metadata.title,
            description=metadata.description,
            favicon=metadata.favicon,
        )

    async def update(
        self,
        bookmark_id: UUID,
        user_id: Optional[UUID],
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Bookmark:
        """Partially update a bookmark.

        None leaves a field untouched; an empty string clears it.
        """
        owner_id = require_user(user_id)
        async with self._uow_factory() as uow:
            bookmark = await uow.bookmarks.get(bookmark_id)
            if not bookmark or not bookmark.is_owned_by(owner_id):
                raise BookmarkNotFoundError(str(bookmark_id))

            if title is not None:
                bookmark.title = title
            if description is not None:
                bookmark.description = description

            updated = await uow.bookmarks.update(bookmark)
            await uow.commit()
            return updated  # type: ignore[no-any-return]

    async def delete(self, bookmark_id: UUID, user_id: Optional[UUID]) -> None:
        """Delete one of the caller's bookmarks."""
        owner_id = require_user(user_id)
        async with self._uow_factory() as uow:
            bookmark = await uow.bookmarks.get(bookmark_id)
            if not bookmark or not bookmark.is_owned_by(owner_id):
                raise BookmarkNotFoundError(str(bookmark_id))

            await uow.bookmarks.delete(bookmark_id)
            await uow.commit()
