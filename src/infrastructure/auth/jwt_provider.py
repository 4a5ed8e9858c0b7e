"""JWT authentication provider implementation.

Accepts tokens from an external identity provider signed with ES256
(public keys served from ``AUTH_JWKS_URL``) and tokens signed locally
with HS256 and the shared secret.

Only the ``sub`` claim is required; it becomes the opaque owner id.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)

# kid -> JWK, fetched once and refreshed when an unknown kid shows up
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys(refresh: bool = False) -> dict[str, Any]:
    """Fetch and cache the identity provider's signing keys."""
    global _jwks_cache
    if _jwks_cache is not None and not refresh:
        return _jwks_cache

    jwks_url = settings.auth_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            keys = response.json().get("keys", [])
    except (httpx.HTTPError, ValueError):
        logger.exception("Failed to fetch JWKS from %s", jwks_url)
        return {}

    _jwks_cache = {key["kid"]: key for key in keys if key.get("kid")}
    logger.info("Fetched %d JWKS keys", len(_jwks_cache))
    return _jwks_cache


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the caller.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid, expired or missing ``sub``
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._decode_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if not payload or not payload.get("sub"):
            return None

        try:
            user_id = UUID(str(payload["sub"]))
        except ValueError:
            return None

        return TokenUser(
            id=user_id,
            email=payload.get("email"),
            role=payload.get("role"),
        )

    async def _decode_es256(self, token: str, header: dict) -> Optional[dict]:
        """Decode an ES256 token with the matching JWKS public key."""
        kid = header.get("kid")
        if not kid:
            return None

        key_data = (await _get_jwks_keys()).get(kid)
        if not key_data:
            # Possibly rotated; refetch once.
            key_data = (await _get_jwks_keys(refresh=True)).get(kid)
            if not key_data:
                logger.warning("JWKS key not found for kid=%s", kid)
                return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """
        Create an HS256 token for a user (local development and tests).

        Args:
            user: The user to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(user.id),
            "aud": "authenticated",
            "role": user.role or "authenticated",
            "exp": expire,
        }
        if user.email:
            payload["email"] = user.email

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
