"""Tests for Google and Apple identity token verification."""

import json
import time
from typing import Any

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from lingonotes.domain.identity.exceptions import InvalidIdentityTokenError
from lingonotes.infrastructure.identity.providers import (
    AppleIdentityProvider,
    GoogleIdentityProvider,
)

TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
APPLE_KEYS_URL = "https://appleid.apple.com/auth/keys"
APPLE_ISSUER = "https://appleid.apple.com"


def google_provider(
    handler: Any, client_id: str | None = None
) -> GoogleIdentityProvider:
    return GoogleIdentityProvider(
        TOKENINFO_URL, client_id=client_id, transport=httpx.MockTransport(handler)
    )


class TestGoogleIdentityProvider:
    async def test_valid_token(self) -> None:
        """Test that tokeninfo claims become the verified identity."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["id_token"] == "google-token"
            return httpx.Response(
                200,
                json={
                    "sub": "google-123",
                    "email": "ana@example.com",
                    "name": "Ana",
                    "picture": "https://example.com/ana.png",
                    "aud": "client.apps.googleusercontent.com",
                },
            )

        identity = await google_provider(handler).verify("google-token")

        assert identity.subject == "google-123"
        assert identity.email == "ana@example.com"
        assert identity.name == "Ana"
        assert identity.picture == "https://example.com/ana.png"

    async def test_rejected_by_google(self) -> None:
        provider = google_provider(lambda request: httpx.Response(400, json={"error": "bad"}))

        with pytest.raises(InvalidIdentityTokenError) as exc_info:
            await provider.verify("bad-token")

        assert exc_info.value.provider == "google"

    async def test_audience_mismatch(self) -> None:
        """Test that a token issued to another app is refused when a client id is set."""
        provider = google_provider(
            lambda request: httpx.Response(200, json={"sub": "1", "aud": "other-app"}),
            client_id="my-app",
        )

        with pytest.raises(InvalidIdentityTokenError, match="Invalid google token"):
            await provider.verify("token")

    async def test_audience_not_checked_without_client_id(self) -> None:
        provider = google_provider(
            lambda request: httpx.Response(200, json={"sub": "1", "aud": "other-app"})
        )

        identity = await provider.verify("token")

        assert identity.subject == "1"

    async def test_missing_subject(self) -> None:
        provider = google_provider(lambda request: httpx.Response(200, json={"email": "a@b.c"}))

        with pytest.raises(InvalidIdentityTokenError):
            await provider.verify("token")

    async def test_non_json_reply(self) -> None:
        """Test that an HTML page served with 200 is treated as an invalid token."""
        provider = google_provider(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(InvalidIdentityTokenError) as exc_info:
            await provider.verify("token")

        assert exc_info.value.provider == "google"

    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(InvalidIdentityTokenError):
            await google_provider(handler).verify("token")


@pytest.fixture(scope="module")
def apple_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def apple_jwks(apple_key: rsa.RSAPrivateKey) -> dict[str, Any]:
    jwk = json.loads(RSAAlgorithm.to_jwk(apple_key.public_key()))
    jwk.update({"kid": "apple-kid", "alg": "RS256", "use": "sig"})
    return {"keys": [jwk]}


def apple_token(
    key: rsa.RSAPrivateKey, kid: str = "apple-kid", **claims: Any
) -> str:
    now = int(time.time())
    payload = {
        "iss": APPLE_ISSUER,
        "aud": "com.lingonotes.app",
        "sub": "apple-001",
        "email": "ana@icloud.com",
        "iat": now,
        "exp": now + 600,
    }
    payload.update(claims)
    return jwt.encode(payload, key, algorithm="RS256", headers={"kid": kid})


def apple_provider(jwks: dict[str, Any], client_id: str | None = None) -> AppleIdentityProvider:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == APPLE_KEYS_URL
        return httpx.Response(200, json=jwks)

    return AppleIdentityProvider(
        APPLE_KEYS_URL,
        APPLE_ISSUER,
        client_id=client_id,
        transport=httpx.MockTransport(handler),
    )


class TestAppleIdentityProvider:
    async def test_valid_token(
        self, apple_key: rsa.RSAPrivateKey, apple_jwks: dict[str, Any]
    ) -> None:
        """Test a token signed with one of Apple's published keys."""
        provider = apple_provider(apple_jwks, client_id="com.lingonotes.app")

        identity = await provider.verify(apple_token(apple_key))

        assert identity.subject == "apple-001"
        assert identity.email == "ana@icloud.com"

    async def test_audience_not_checked_without_client_id(
        self, apple_key: rsa.RSAPrivateKey, apple_jwks: dict[str, Any]
    ) -> None:
        identity = await apple_provider(apple_jwks).verify(
            apple_token(apple_key, aud="some.other.app")
        )

        assert identity.subject == "apple-001"

    async def test_wrong_audience(
        self, apple_key: rsa.RSAPrivateKey, apple_jwks: dict[str, Any]
    ) -> None:
        provider = apple_provider(apple_jwks, client_id="com.lingonotes.app")

        with pytest.raises(InvalidIdentityTokenError):
            await provider.verify(apple_token(apple_key, aud="some.other.app"))

    async def test_wrong_issuer(
        self, apple_key: rsa.RSAPrivateKey, apple_jwks: dict[str, Any]
    ) -> None:
        with pytest.raises(InvalidIdentityTokenError):
            await apple_provider(apple_jwks).verify(
                apple_token(apple_key, iss="https://evil.example.com")
            )

    async def test_expired(self, apple_key: rsa.RSAPrivateKey, apple_jwks: dict[str, Any]) -> None:
        with pytest.raises(InvalidIdentityTokenError):
            await apple_provider(apple_jwks).verify(
                apple_token(apple_key, exp=int(time.time()) - 60)
            )

    async def test_unknown_key_id(
        self, apple_key: rsa.RSAPrivateKey, apple_jwks: dict[str, Any]
    ) -> None:
        with pytest.raises(InvalidIdentityTokenError) as exc_info:
            await apple_provider(apple_jwks).verify(apple_token(apple_key, kid="rotated"))

        assert exc_info.value.reason == "unknown signing key"

    async def test_signed_with_other_key(self, apple_jwks: dict[str, Any]) -> None:
        """Test that a token signed by an unrelated key fails signature verification."""
        other_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

        with pytest.raises(InvalidIdentityTokenError):
            await apple_provider(apple_jwks).verify(apple_token(other_key))

    async def test_malformed_token(self, apple_jwks: dict[str, Any]) -> None:
        with pytest.raises(InvalidIdentityTokenError) as exc_info:
            await apple_provider(apple_jwks).verify("garbage")

        assert exc_info.value.reason == "malformed token"

    async def test_keys_unavailable(self, apple_key: rsa.RSAPrivateKey) -> None:
        provider = AppleIdentityProvider(
            APPLE_KEYS_URL,
            APPLE_ISSUER,
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )

        with pytest.raises(InvalidIdentityTokenError) as exc_info:
            await provider.verify(apple_token(apple_key))

        assert exc_info.value.reason == "could not load signing keys"
