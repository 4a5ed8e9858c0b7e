"""Pydantic schemas for Bookmark API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class BookmarkCreate(BaseModel):
    """Schema for storing a Bookmark with caller-supplied metadata."""

    profile_id: UUID
    url: str = Field(..., min_length=1, max_length=2048)
    title: str = Field(..., max_length=500)
    description: str | None = Field(None, max_length=2000)
    favicon: str | None = Field(None, max_length=2048)


class BookmarkFetch(BaseModel):
    """Schema for adding a Bookmark whose metadata is scraped from the page."""

    profile_id: UUID
    url: str = Field(..., min_length=1, max_length=2048)


class BookmarkUpdate(BaseModel):
    """Schema for updating a Bookmark.

    Omitted or null fields are left alone; an empty string clears the field.
    """

    title: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=2000)


class BookmarkResponse(BaseModel):
    """Schema for Bookmark response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "profile_id": "456e4567-e89b-12d3-a456-426614174000",
                "url": "https://example.com",
                "title": "Example Domain",
                "description": "",
                "favicon": "https://example.com/favicon.ico",
                "added_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    profile_id: UUID
    url: str
    title: str
    description: str | None = None
    favicon: str | None = None
    added_at: datetime


class BookmarkListResponse(BaseModel):
    """Schema for list of Bookmarks."""

    data: list[BookmarkResponse]


class BookmarkDetailResponse(BaseModel):
    """Schema for single Bookmark."""

    data: BookmarkResponse
