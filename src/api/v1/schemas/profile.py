"""Pydantic schemas for Profile API."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name must not be blank")
    return v


ProfileName = Annotated[str, Field(min_length=1, max_length=100), AfterValidator(_clean_name)]
ColorHex = Annotated[
    str, Field(pattern=r"^#[0-9A-Fa-f]{6}$"), AfterValidator(lambda v: v.upper())
]


class ProfileBase(BaseModel):
    """Base schema for Profile."""

    name: ProfileName
    color_hex: ColorHex = "#3B82F6"


class ProfileCreate(ProfileBase):
    """Schema for creating a Profile."""

    is_default: bool = False


class ProfileUpdate(BaseModel):
    """Schema for renaming or recoloring a Profile."""

    name: ProfileName | None = None
    color_hex: ColorHex | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "456e4567-e89b-12d3-a456-426614174000",
                "name": "Work",
                "color_hex": "#3B82F6",
                "is_default": True,
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    color_hex: str
    is_default: bool
    created_at: datetime


class ProfileListResponse(BaseModel):
    """Schema for list of Profiles."""

    data: list[ProfileResponse]


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class DefaultProfileResponse(BaseModel):
    """Schema for the default Profile lookup; ``data`` is null without profiles."""

    data: ProfileResponse | None


class EnsureDefaultResult(BaseModel):
    """Outcome of the ensure-default repair."""

    profile_id: UUID | None = Field(
        None,
        description="Profile created or promoted to default; null when nothing changed",
    )


class EnsureDefaultResponse(BaseModel):
    """Schema for the ensure-default repair result."""

    data: EnsureDefaultResult
