"""Caller identity dependencies.

Read endpoints take ``OptionalUser``: a missing or invalid token makes the
caller anonymous and the endpoint answers with an empty result. Write
endpoints take ``CurrentUser``, which turns the same situations into 401.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, TokenUser

bearer_scheme = HTTPBearer(auto_error=False)

Credentials = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


@lru_cache
def get_auth_provider() -> IAuthProvider:
    return JWTAuthProvider()


async def get_optional_user(
    credentials: Credentials,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser | None:
    """The caller behind the bearer token, or None for anonymous callers."""
    if not credentials:
        return None
    return await auth_provider.validate_token(credentials.credentials)


async def get_current_user(
    credentials: Credentials,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    The caller behind the bearer token.

    Raises:
        AuthenticationError: UNAUTHORIZED without a token, INVALID_TOKEN
            when the token does not validate
    """
    if not credentials:
        raise AuthenticationError(message="Authorization header required")

    user = await get_optional_user(credentials, auth_provider)
    if user is None:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )
    return user


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
OptionalUser = Annotated[TokenUser | None, Depends(get_optional_user)]
