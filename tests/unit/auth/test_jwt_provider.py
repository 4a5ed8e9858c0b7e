"""Unit tests for JWTAuthProvider.

Covers:
- validate_token claim handling (only ``sub`` is required)
- _get_jwks_keys() fetching, caching, refresh and error handling
- _decode_es256() with a mocked JWKS lookup
"""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import httpx
import pytest
from jose import jwt as jose_jwt

from infrastructure.auth import jwt_provider as jwt_provider_module
from infrastructure.auth.jwt_provider import JWTAuthProvider, _get_jwks_keys
from infrastructure.auth.provider import TokenUser

JWKS_URL = "https://auth.example.com/.well-known/jwks.json"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    """Create an HS256-signed JWT with a given payload."""
    return jose_jwt.encode(payload, secret, algorithm="HS256")


def _mock_jwks_client(fake_jwks: dict) -> AsyncMock:
    response = MagicMock()
    response.json.return_value = fake_jwks
    response.raise_for_status = MagicMock()

    client = AsyncMock()
    client.get.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clear_jwks_cache():
    """Reset the module-level JWKS cache before and after every test."""
    jwt_provider_module._jwks_cache = None
    yield
    jwt_provider_module._jwks_cache = None


@pytest.fixture
def hs256_provider() -> JWTAuthProvider:
    """JWTAuthProvider configured for HS256 (local/test tokens)."""
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


# ---------------------------------------------------------------------------
# Tests: validate_token claims
# ---------------------------------------------------------------------------


class TestValidateTokenClaims:
    async def test_should_accept_token_with_only_sub(self, hs256_provider: JWTAuthProvider):
        """Email is optional; the subject alone identifies the caller."""
        user_id = uuid4()
        token = _make_hs256_token({"sub": str(user_id), "exp": 9999999999})

        result = await hs256_provider.validate_token(token)

        assert result is not None
        assert result.id == user_id
        assert result.email is None

    async def test_should_return_none_when_token_has_no_sub_claim(
        self, hs256_provider: JWTAuthProvider
    ):
        token = _make_hs256_token({"email": "user@example.com", "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_should_return_none_when_token_has_empty_sub(
        self, hs256_provider: JWTAuthProvider
    ):
        token = _make_hs256_token({"sub": "", "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_should_return_none_when_sub_is_not_a_uuid(
        self, hs256_provider: JWTAuthProvider
    ):
        token = _make_hs256_token({"sub": "not-a-uuid", "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_should_return_none_for_wrong_secret(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": str(uuid4()), "exp": 9999999999}, secret="other")

        assert await hs256_provider.validate_token(token) is None

    async def test_should_round_trip_created_token(self, hs256_provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), email="user@example.com")

        result = await hs256_provider.validate_token(hs256_provider.create_token(user))

        assert result is not None
        assert result.id == user.id
        assert result.email == "user@example.com"
        assert result.role == "authenticated"


# ---------------------------------------------------------------------------
# Tests: _get_jwks_keys
# ---------------------------------------------------------------------------


class TestGetJwksKeys:
    async def test_should_return_empty_dict_when_no_jwks_url(self):
        with patch.object(jwt_provider_module, "settings") as mock_settings:
            mock_settings.auth_jwks_url = ""

            result = await _get_jwks_keys()

            assert result == {}

    async def test_should_fetch_and_cache_jwks_keys(self):
        client = _mock_jwks_client(
            {
                "keys": [
                    {"kid": "key-1", "kty": "EC", "crv": "P-256", "x": "aa", "y": "bb"},
                    {"kid": "key-2", "kty": "EC", "crv": "P-256", "x": "cc", "y": "dd"},
                ]
            }
        )

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client),
        ):
            mock_settings.auth_jwks_url = JWKS_URL

            result = await _get_jwks_keys()

            assert set(result) == {"key-1", "key-2"}
            assert result["key-1"]["kty"] == "EC"

            # Second call is served from the cache
            client.get.reset_mock()
            cached_result = await _get_jwks_keys()
            client.get.assert_not_called()
            assert cached_result == result

    async def test_should_refetch_when_refresh_requested(self):
        client = _mock_jwks_client({"keys": [{"kid": "key-1", "kty": "EC"}]})

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client),
        ):
            mock_settings.auth_jwks_url = JWKS_URL

            await _get_jwks_keys()
            await _get_jwks_keys(refresh=True)

            assert client.get.call_count == 2

    async def test_should_return_empty_dict_on_http_error(self):
        client = _mock_jwks_client({})
        client.get.side_effect = httpx.ConnectError("Connection refused")

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client),
        ):
            mock_settings.auth_jwks_url = JWKS_URL

            result = await _get_jwks_keys()

            assert result == {}
            assert jwt_provider_module._jwks_cache is None

    async def test_should_skip_keys_without_kid(self):
        client = _mock_jwks_client(
            {
                "keys": [
                    {"kty": "EC", "crv": "P-256", "x": "aa", "y": "bb"},
                    {"kid": "good-key", "kty": "EC", "crv": "P-256", "x": "cc", "y": "dd"},
                ]
            }
        )

        with (
            patch.object(jwt_provider_module, "settings") as mock_settings,
            patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client),
        ):
            mock_settings.auth_jwks_url = JWKS_URL

            result = await _get_jwks_keys()

            assert list(result) == ["good-key"]


# ---------------------------------------------------------------------------
# Tests: _decode_es256
# ---------------------------------------------------------------------------


class TestDecodeEs256:
    async def test_should_return_none_when_header_has_no_kid(
        self, hs256_provider: JWTAuthProvider
    ):
        result = await hs256_provider._decode_es256("dummy.token.value", {"alg": "ES256"})

        assert result is None

    async def test_should_return_none_when_kid_not_found_after_refetch(
        self, hs256_provider: JWTAuthProvider
    ):
        with patch.object(
            jwt_provider_module, "_get_jwks_keys", new_callable=AsyncMock
        ) as mock_get_jwks:
            mock_get_jwks.return_value = {"other-kid": {"kty": "EC"}}

            result = await hs256_provider._decode_es256(
                "dummy.token.value", {"alg": "ES256", "kid": "missing-kid"}
            )

            assert result is None
            assert mock_get_jwks.call_count == 2
            assert mock_get_jwks.call_args.kwargs == {"refresh": True}

    async def test_should_decode_token_when_kid_found(self, hs256_provider: JWTAuthProvider):
        fake_key_data = {"kid": "test-kid", "kty": "EC", "crv": "P-256"}
        fake_payload = {"sub": str(uuid4()), "exp": 9999999999}

        with (
            patch.object(
                jwt_provider_module, "_get_jwks_keys", new_callable=AsyncMock
            ) as mock_get_jwks,
            patch.object(jwt_provider_module, "ECKey") as mock_eckey_cls,
            patch.object(jwt_provider_module, "jwt") as mock_jwt,
        ):
            mock_get_jwks.return_value = {"test-kid": fake_key_data}
            mock_ec_instance = MagicMock()
            mock_eckey_cls.return_value = mock_ec_instance
            mock_jwt.decode.return_value = fake_payload

            result = await hs256_provider._decode_es256(
                "es256.token.value", {"alg": "ES256", "kid": "test-kid"}
            )

            assert result == fake_payload
            mock_eckey_cls.assert_called_once_with(fake_key_data, algorithm="ES256")
            mock_jwt.decode.assert_called_once_with(
                "es256.token.value",
                mock_ec_instance,
                algorithms=["ES256"],
                options={"verify_aud": False},
            )

    async def test_should_refetch_jwks_on_key_rotation(self, hs256_provider: JWTAuthProvider):
        fake_key_data = {"kid": "rotated-kid", "kty": "EC", "crv": "P-256"}

        async def rotated_keys(refresh: bool = False) -> dict:
            return {"rotated-kid": fake_key_data} if refresh else {}

        with (
            patch.object(jwt_provider_module, "_get_jwks_keys", side_effect=rotated_keys),
            patch.object(jwt_provider_module, "ECKey") as mock_eckey_cls,
            patch.object(jwt_provider_module, "jwt") as mock_jwt,
        ):
            mock_jwt.decode.return_value = {"sub": str(uuid4())}

            result = await hs256_provider._decode_es256(
                "rotated.token.value", {"alg": "ES256", "kid": "rotated-kid"}
            )

            assert result is not None
            mock_eckey_cls.assert_called_once_with(fake_key_data, algorithm="ES256")


# ---------------------------------------------------------------------------
# Tests: validate_token ES256 path
# ---------------------------------------------------------------------------


class TestValidateTokenEs256Path:
    async def test_should_delegate_to_decode_es256_for_es256_token(
        self, hs256_provider: JWTAuthProvider
    ):
        user_id = str(uuid4())
        fake_payload = {"sub": user_id, "email": "es256user@example.com", "role": "authenticated"}

        with patch.object(jwt_provider_module, "jwt") as mock_jwt:
            mock_jwt.get_unverified_header.return_value = {"alg": "ES256", "kid": "k1"}

            with patch.object(
                hs256_provider, "_decode_es256", new_callable=AsyncMock
            ) as mock_es256:
                mock_es256.return_value = fake_payload

                result = await hs256_provider.validate_token("es256.token.here")

                mock_es256.assert_called_once_with(
                    "es256.token.here", {"alg": "ES256", "kid": "k1"}
                )
                assert result is not None
                assert str(result.id) == user_id
                assert result.email == "es256user@example.com"
                assert result.role == "authenticated"

    async def test_should_return_none_when_es256_decode_returns_none(
        self, hs256_provider: JWTAuthProvider
    ):
        with patch.object(jwt_provider_module, "jwt") as mock_jwt:
            mock_jwt.get_unverified_header.return_value = {"alg": "ES256", "kid": "k1"}

            with patch.object(
                hs256_provider, "_decode_es256", new_callable=AsyncMock
            ) as mock_es256:
                mock_es256.return_value = None

                assert await hs256_provider.validate_token("es256.token.here") is None
