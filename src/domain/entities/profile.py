"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

DEFAULT_PROFILE_NAME = "Default"
DEFAULT_PROFILE_COLOR = "#3B82F6"  # Blue


def normalize_color_hex(value: str) -> str:
    """Return the color as '#RRGGBB' upper-case."""
    if not value.startswith("#"):
        value = f"#{value}"
    return value.upper()


@dataclass
class Profile:
    """A named, colored grouping of bookmarks owned by one user."""

    user_id: UUID
    name: str
    id: UUID = field(default_factory=uuid4)
    color_hex: str = DEFAULT_PROFILE_COLOR
    is_default: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.color_hex = normalize_color_hex(self.color_hex)

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id
