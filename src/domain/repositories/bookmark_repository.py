"""Bookmark repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.bookmark import Bookmark


class IBookmarkRepository(Protocol):
    """Repository interface for Bookmark entities."""

    async def get(self, id: UUID) -> Bookmark | None:
        """Get a bookmark by ID."""
        ...

    async def get_all_for_profile(self, profile_id: UUID) -> list[Bookmark]:
        """Get all bookmarks in a profile, most recently added first."""
        ...

    async def create(self, bookmark: Bookmark) -> Bookmark:
        """Create a new bookmark."""
        ...

    async def update(self, bookmark: Bookmark) -> Bookmark:
        """Update title and description of an existing bookmark."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a bookmark and return success status."""
        ...

    async def delete_all_for_profile(self, profile_id: UUID) -> int:
        """Delete every bookmark in a profile and return how many were removed."""
        ...
