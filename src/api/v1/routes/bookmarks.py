"""Bookmark API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser, OptionalUser
from api.v1.dependencies import get_bookmark_service
from api.v1.schemas.bookmark import (
    BookmarkCreate,
    BookmarkDetailResponse,
    BookmarkFetch,
    BookmarkListResponse,
    BookmarkResponse,
    BookmarkUpdate,
)
from api.v1.schemas.common import BOOKMARK_NOT_FOUND, PROFILE_NOT_FOUND, UNAUTHORIZED
from core.rate_limit import FETCH_LIMIT, READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.bookmark import Bookmark
from domain.services.bookmark_service import BookmarkService

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


def _to_response(bookmark: Bookmark) -> BookmarkResponse:
    return BookmarkResponse(
        id=bookmark.id,
        profile_id=bookmark.profile_id,
        url=bookmark.url,
        title=bookmark.title,
        description=bookmark.description,
        favicon=bookmark.favicon,
        added_at=bookmark.added_at,
    )


@router.post(
    "",
    response_model=BookmarkDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a bookmark",
    responses={
        201: {"description": "Bookmark created successfully"},
        **PROFILE_NOT_FOUND,
        **UNAUTHORIZED,
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_bookmark(
    request: Request,
    body: BookmarkCreate,
    user: CurrentUser,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkDetailResponse:
    """Store a bookmark with the given title, description and favicon."""
    bookmark = await service.create(
        user.id,
        body.profile_id,
        url=body.url,
        title=body.title,
        description=body.description,
        favicon=body.favicon,
    )
    return BookmarkDetailResponse(data=_to_response(bookmark))


@router.post(
    "/fetch",
    response_model=BookmarkDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a bookmark from a URL",
    responses={
        201: {"description": "Bookmark created; metadata filled in when the page was reachable"},
        **PROFILE_NOT_FOUND,
        **UNAUTHORIZED,
    },
)
@limiter.limit(FETCH_LIMIT)  # type: ignore[untyped-decorator]
async def add_bookmark_with_metadata(
    request: Request,
    body: BookmarkFetch,
    user: CurrentUser,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkDetailResponse:
    """Fetch the page behind a URL, scrape its metadata and store the bookmark.

    An unreachable page still produces a bookmark titled with its URL.
    """
    bookmark = await service.add_with_metadata(user.id, body.profile_id, body.url)
    return BookmarkDetailResponse(data=_to_response(bookmark))


@router.patch(
    "/{bookmark_id}",
    response_model=BookmarkDetailResponse,
    summary="Update a bookmark",
    responses={
        200: {"description": "Bookmark updated successfully"},
        **BOOKMARK_NOT_FOUND,
        **UNAUTHORIZED,
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_bookmark(
    request: Request,
    bookmark_id: UUID,
    body: BookmarkUpdate,
    user: CurrentUser,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkDetailResponse:
    """Edit the title or description of a bookmark."""
    bookmark = await service.update(
        bookmark_id=bookmark_id,
        user_id=user.id,
        title=body.title,
        description=body.description,
    )
    return BookmarkDetailResponse(data=_to_response(bookmark))


@router.delete(
    "/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a bookmark",
    responses={
        204: {"description": "Bookmark deleted successfully"},
        **BOOKMARK_NOT_FOUND,
        **UNAUTHORIZED,
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_bookmark(
    request: Request,
    bookmark_id: UUID,
    user: CurrentUser,
    service: BookmarkService = Depends(get_bookmark_service),
) -> None:
    """Delete a bookmark."""
    await service.delete(bookmark_id, user.id)
    return None


# Profile-scoped listing
profile_bookmarks_router = APIRouter(prefix="/profiles/{profile_id}/bookmarks", tags=["bookmarks"])


@profile_bookmarks_router.get(
    "",
    response_model=BookmarkListResponse,
    summary="List bookmarks in a profile",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profile_bookmarks(
    request: Request,
    profile_id: UUID,
    user: OptionalUser,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkListResponse:
    """Get a profile's bookmarks, most recently added first.

    Unknown or foreign profiles and anonymous callers get an empty list.
    """
    bookmarks = await service.get_all_for_profile(profile_id, user.id if user else None)
    return BookmarkListResponse(data=[_to_response(b) for b in bookmarks])
