"""Caller identity resolution for store operations.

Queries and mutations treat an anonymous caller differently. Queries take
``UUID | None`` and answer an anonymous caller with an empty result.
Mutations resolve the caller through :func:`require_user`, which rejects
anonymous calls instead of silently doing nothing.
"""

from uuid import UUID

from core.exceptions import AuthenticationError


def require_user(user_id: UUID | None) -> UUID:
    """Resolve the caller of a mutation or raise ``AuthenticationError``."""
    if user_id is None:
        raise AuthenticationError()
    return user_id
