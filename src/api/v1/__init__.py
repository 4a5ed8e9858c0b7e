"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.bookmarks import profile_bookmarks_router
from api.v1.routes.bookmarks import router as bookmarks_router
from api.v1.routes.profiles import router as profiles_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(profile_bookmarks_router)
router.include_router(bookmarks_router)
