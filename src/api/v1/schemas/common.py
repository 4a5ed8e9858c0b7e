"""Schemas shared by the profile and bookmark routes."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error_code: str
    message: str
    details: Any | None = None


# OpenAPI entries for the error responses routes can return
UNAUTHORIZED = {401: {"model": ErrorResponse, "description": "Not authenticated"}}
PROFILE_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Profile not found"}}
BOOKMARK_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Bookmark not found"}}
