"""Bookmark domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Bookmark:
    """Domain entity for a saved link.

    ``user_id`` is copied from the owning profile when the bookmark is
    created so ownership can be checked without loading the profile.
    Bookmarks never move to another owner's profile.
    """

    user_id: UUID
    profile_id: UUID
    url: str
    title: str
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    favicon: str | None = None
    added_at: datetime = field(default_factory=datetime.utcnow)

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id
