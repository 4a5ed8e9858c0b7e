"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all_for_user(self, user_id: UUID, for_update: bool = False) -> list[Profile]:
        """Get all profiles for a user, earliest-created first."""
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .order_by(ProfileModel.created_at, ProfileModel.id)
        )
        if for_update:
            # Ignored by SQLite, row locks on PostgreSQL.
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_default(self, user_id: UUID) -> Profile | None:
        """Get the profile flagged as default for a user."""
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.user_id == user_id, ProfileModel.is_default.is_(True))
            .order_by(ProfileModel.created_at)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update name and color of an existing profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.name = profile.name
        model.color_hex = profile.color_hex

        await self._session.flush()
        return self._to_entity(model)

    async def set_default(self, user_id: UUID, profile_id: UUID) -> None:
        """Flag one profile as default and clear the flag on all others.

        The clear runs first so the single-default index holds after
        every statement.
        """
        await self._session.execute(
            update(ProfileModel)
            .where(ProfileModel.user_id == user_id, ProfileModel.id != profile_id)
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(
            update(ProfileModel)
            .where(ProfileModel.user_id == user_id, ProfileModel.id == profile_id)
            .values(is_default=True)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()

    async def clear_default(self, user_id: UUID) -> None:
        """Clear the default flag on all of a user's profiles."""
        await self._session.execute(
            update(ProfileModel)
            .where(ProfileModel.user_id == user_id, ProfileModel.is_default.is_(True))
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()

    async def delete(self, id: UUID) -> bool:
        """Delete a profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            color_hex=model.color_hex,
            is_default=model.is_default,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            name=entity.name,
            color_hex=entity.color_hex,
            is_default=entity.is_default,
            created_at=entity.created_at,
        )
