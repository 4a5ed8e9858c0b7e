"""Profile service layer with default-profile bookkeeping."""

from typing import Callable, List, Optional
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import (
    DEFAULT_PROFILE_COLOR,
    DEFAULT_PROFILE_NAME,
    Profile,
    normalize_color_hex,
)
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.identity import require_user
from domain.services.owner_locks import OwnerLocks

logger = structlog.get_logger()


class ProfileService:
    """Service layer for Profile business logic.

    Every owner with at least one profile has exactly one default profile.
    Operations that touch more than one profile row run under the owner's
    lock, read the owner's profiles with row locks, and commit all writes
    in one transaction.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        owner_locks: Optional[OwnerLocks] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._owner_locks = owner_locks or OwnerLocks()

    async def get_all_for_user(self, user_id: Optional[UUID]) -> List[Profile]:
        """Get all profiles of the caller; anonymous callers see none."""
        if user_id is None:
            return []
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all_for_user(user_id)  # type: ignore[no-any-return]

    async def get_default(self, user_id: Optional[UUID]) -> Optional[Profile]:
        """Get the caller's default profile, falling back to the first one."""
        if user_id is None:
            return None
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_default(user_id)
            if profile:
                return profile  # type: ignore[no-any-return]
            profiles = await uow.profiles.get_all_for_user(user_id)
            return profiles[0] if profiles else None

    async def ensure_default(self, user_id: Optional[UUID]) -> Optional[UUID]:
        """Make sure the caller has a default profile.

        Creates a "Default" profile when the caller has none, or promotes
        the earliest-created profile when none is flagged. Returns the id
        of the profile that was created or promoted, None if nothing changed.
        Safe to call on every session start.
        """
        owner_id = require_user(user_id)
        async with self._owner_locks.for_owner(owner_id):
            async with self._uow_factory() as uow:
                profiles = await uow.profiles.get_all_for_user(owner_id, for_update=True)

                if not profiles:
                    profile = Profile(
                        user_id=owner_id,
                        name=DEFAULT_PROFILE_NAME,
                        color_hex=DEFAULT_PROFILE_COLOR,
                        is_default=True,
                    )
                    try:
                        created = await uow.profiles.create(profile)
                        await uow.commit()
                    except IntegrityError as exc:
                        await uow.rollback()
                        # Another process created the default first.
                        orig = str(exc.orig).lower() if exc.orig else ""
                        if "unique" in orig or "duplicate" in orig:
                            logger.debug("default_profile_race_lost", user_id=str(owner_id))
                            return None
                        raise
                    logger.info(
                        "default_profile_created",
                        user_id=str(owner_id),
                        profile_id=str(created.id),
                    )
                    return created.id  # type: ignore[no-any-return]

                if any(p.is_default for p in profiles):
                    return None

                promoted = profiles[0]
                await uow.profiles.set_default(owner_id, promoted.id)
                await uow.commit()
                logger.info(
                    "default_profile_promoted",
                    user_id=str(owner_id),
                    profile_id=str(promoted.id),
                )
                return promoted.id

    async def create(
        self,
        user_id: Optional[UUID],
        name: str,
        color_hex: str = DEFAULT_PROFILE_COLOR,
        is_default: bool = False,
    ) -> Profile:
        """Create a profile. The caller's first profile always becomes default."""
        owner_id = require_user(user_id)
        async with self._owner_locks.for_owner(owner_id):
            async with self._uow_factory() as uow:
                existing = await uow.profiles.get_all_for_user(owner_id, for_update=True)
                make_default = is_default or not existing

                if make_default and any(p.is_default for p in existing):
                    await uow.profiles.clear_default(owner_id)

                profile = Profile(
                    user_id=owner_id,
                    name=name,
                    color_hex=color_hex,
                    is_default=make_default,
                )
                created = await uow.profiles.create(profile)
                await uow.commit()
                return created  # type: ignore[no-any-return]

    async def update(
        self,
        profile_id: UUID,
        user_id: Optional[UUID],
        name: Optional[str] = None,
        color_hex: Optional[str] = None,
    ) -> Profile:
        """Rename or recolor a profile."""
        owner_id = require_user(user_id)
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile or not profile.is_owned_by(owner_id):
                raise ProfileNotFoundError(str(profile_id))

            if name:
                profile.name = name
            if color_hex:
                profile.color_hex = normalize_color_hex(color_hex)

            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated  # type: ignore[no-any-return]

    async def set_default(self, profile_id: UUID, user_id: Optional[UUID]) -> None:
        """Make one profile the caller's only default profile."""
        owner_id = require_user(user_id)
        async with self._owner_locks.for_owner(owner_id):
            async with self._uow_factory() as uow:
                profiles = await uow.profiles.get_all_for_user(owner_id, for_update=True)
                if not any(p.id == profile_id for p in profiles):
                    raise ProfileNotFoundError(str(profile_id))

                await uow.profiles.set_default(owner_id, profile_id)
                await uow.commit()

    async def delete(self, profile_id: UUID, user_id: Optional[UUID]) -> None:
        """Delete a profile together with all of its bookmarks.

        Deleting the default profile promotes the earliest-created remaining
        profile. Deleting the last profile is allowed.
        """
        owner_id = require_user(user_id)
        async with self._owner_locks.for_owner(owner_id):
            async with self._uow_factory() as uow:
                profiles = await uow.profiles.get_all_for_user(owner_id, for_update=True)
                target = next((p for p in profiles if p.id == profile_id), None)
                if target is None:
                    raise ProfileNotFoundError(str(profile_id))

                removed = await uow.bookmarks.delete_all_for_profile(profile_id)
                await uow.profiles.delete(profile_id)

                remaining = [p for p in profiles if p.id != profile_id]
                if target.is_default and remaining:
                    await uow.profiles.set_default(owner_id, remaining[0].id)

                await uow.commit()
                logger.info(
                    "profile_deleted",
                    user_id=str(owner_id),
                    profile_id=str(profile_id),
                    bookmarks_deleted=removed,
                )
