"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser, OptionalUser
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import PROFILE_NOT_FOUND, UNAUTHORIZED
from api.v1.schemas.profile import (
    DefaultProfileResponse,
    EnsureDefaultResponse,
    EnsureDefaultResult,
    ProfileCreate,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import Profile
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        name=profile.name,
        color_hex=profile.color_hex,
        is_default=profile.is_default,
        created_at=profile.created_at,
    )


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    user: OptionalUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get all profiles of the caller. Anonymous callers get an empty list."""
    profiles = await service.get_all_for_user(user.id if user else None)
    return ProfileListResponse(data=[_to_response(p) for p in profiles])


@router.get(
    "/default",
    response_model=DefaultProfileResponse,
    summary="Get the default profile",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_default_profile(
    request: Request,
    user: OptionalUser,
    service: ProfileService = Depends(get_profile_service),
) -> DefaultProfileResponse:
    """Get the caller's default profile, or the first one if none is flagged."""
    profile = await service.get_default(user.id if user else None)
    return DefaultProfileResponse(data=_to_response(profile) if profile else None)


@router.post(
    "/ensure-default",
    response_model=EnsureDefaultResponse,
    summary="Make sure a default profile exists",
    responses=UNAUTHORIZED,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def ensure_default_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> EnsureDefaultResponse:
    """Create or promote a default profile when the caller lacks one.

    Idempotent; intended to be called at the start of every session.
    """
    profile_id = await service.ensure_default(user.id)
    return EnsureDefaultResponse(data=EnsureDefaultResult(profile_id=profile_id))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a profile",
    responses={
        201: {"description": "Profile created successfully"},
        **UNAUTHORIZED,
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create a profile. Creating it as default clears the previous default."""
    profile = await service.create(
        user_id=user.id,
        name=body.name,
        color_hex=body.color_hex,
        is_default=body.is_default,
    )
    return ProfileDetailResponse(data=_to_response(profile))


@router.patch(
    "/{profile_id}",
    response_model=ProfileDetailResponse,
    summary="Rename or recolor a profile",
    responses={
        200: {"description": "Profile updated successfully"},
        **PROFILE_NOT_FOUND,
        **UNAUTHORIZED,
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    profile_id: UUID,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Update a profile's name or color."""
    profile = await service.update(
        profile_id=profile_id,
        user_id=user.id,
        name=body.name,
        color_hex=body.color_hex,
    )
    return ProfileDetailResponse(data=_to_response(profile))


@router.post(
    "/{profile_id}/default",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Set the default profile",
    responses={
        204: {"description": "Default profile changed"},
        **PROFILE_NOT_FOUND,
        **UNAUTHORIZED,
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def set_default_profile(
    request: Request,
    profile_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> None:
    """Make this profile the caller's only default profile."""
    await service.set_default(profile_id, user.id)
    return None


@router.delete(
    "/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a profile",
    responses={
        204: {"description": "Profile and its bookmarks deleted"},
        **PROFILE_NOT_FOUND,
        **UNAUTHORIZED,
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    profile_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> None:
    """Delete a profile and every bookmark in it."""
    await service.delete(profile_id, user.id)
    return None
