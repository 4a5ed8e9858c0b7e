"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_all_for_user(
        self, user_id: UUID, for_update: bool = False
    ) -> list[Profile]:
        """Get all profiles for a user, earliest-created first.

        With ``for_update`` the rows stay locked until the transaction ends.
        """
        ...

    async def get_default(self, user_id: UUID) -> Profile | None:
        """Get the profile flagged as default for a user."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update name and color of an existing profile."""
        ...

    async def set_default(self, user_id: UUID, profile_id: UUID) -> None:
        """Flag one profile as default and clear the flag on all others."""
        ...

    async def clear_default(self, user_id: UUID) -> None:
        """Clear the default flag on all of a user's profiles."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a profile and return success status."""
        ...
