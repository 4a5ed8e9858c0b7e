"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """Caller identity taken from a validated token.

    ``id`` is the token subject and owns every profile and bookmark the
    caller creates. The other claims are informational.
    """

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None


class IAuthProvider(Protocol):
    """Turns bearer tokens into callers and back."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the caller, or None when the token is invalid or expired."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Issue a token for ``user``."""
        ...
