"""SQLAlchemy implementation of Bookmark repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.bookmark import Bookmark
from infrastructure.database.models import BookmarkModel


class SQLAlchemyBookmarkRepository:
    """SQLAlchemy implementation of IBookmarkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Bookmark | None:
        """Get a bookmark by ID."""
        stmt = select(BookmarkModel).where(BookmarkModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all_for_profile(self, profile_id: UUID) -> list[Bookmark]:
        """Get all bookmarks in a profile, most recently added first."""
        stmt = (
            select(BookmarkModel)
            .where(BookmarkModel.profile_id == profile_id)
            .order_by(BookmarkModel.added_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, bookmark: Bookmark) -> Bookmark:
        """Create a new bookmark."""
        model = self._to_model(bookmark)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, bookmark: Bookmark) -> Bookmark:
        """Update title and description of an existing bookmark."""
        stmt = select(BookmarkModel).where(BookmarkModel.id == bookmark.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Bookmark {bookmark.id} not found")

        model.title = bookmark.title
        model.description = bookmark.description

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a bookmark."""
        stmt = select(BookmarkModel).where(BookmarkModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_all_for_profile(self, profile_id: UUID) -> int:
        """Delete every bookmark in a profile."""
        stmt = delete(BookmarkModel).where(BookmarkModel.profile_id == profile_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount or 0

    def _to_entity(self, model: BookmarkModel) -> Bookmark:
        """Convert ORM model to domain entity."""
        return Bookmark(
            id=model.id,
            user_id=model.user_id,
            profile_id=model.profile_id,
            url=model.url,
            title=model.title,
            description=model.description,
            favicon=model.favicon,
            added_at=model.added_at,
        )

    def _to_model(self, entity: Bookmark) -> BookmarkModel:
        """Convert domain entity to ORM model."""
        return BookmarkModel(
            id=entity.id,
            user_id=entity.user_id,
            profile_id=entity.profile_id,
            url=entity.url,
            title=entity.title,
            description=entity.description,
            favicon=entity.favicon,
            added_at=entity.added_at,
        )
