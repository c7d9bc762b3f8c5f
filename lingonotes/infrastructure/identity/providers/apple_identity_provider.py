"""Sign in with Apple identity token verification against Apple's JWKS."""

import httpx
import jwt
import structlog
from jwt import InvalidTokenError, PyJWK, PyJWKSet
from jwt.exceptions import PyJWKError, PyJWKSetError

from lingonotes.domain.identity.entities.principal import ExternalIdentity
from lingonotes.domain.identity.exceptions import InvalidIdentityTokenError

logger = structlog.get_logger(__name__)


class AppleIdentityProvider:
    """
    Verifies Apple identity tokens.

    Apple's public keys are fetched on every verification, the signing key is
    picked by the token's ``kid`` header, and the issuer must be Apple. The
    audience is only checked when ``client_id`` is configured.
    """

    name = "apple"

    def __init__(
        self,
        keys_url: str,
        issuer: str,
        client_id: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.keys_url = keys_url
        self.issuer = issuer
        self.client_id = client_id
        self.timeout = timeout
        self._transport = transport

    async def _fetch_keys(self) -> PyJWKSet:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.keys_url)
            response.raise_for_status()
        return PyJWKSet.from_dict(response.json())

    async def _signing_key(self, kid: str | None) -> PyJWK:
        try:
            key_set = await self._fetch_keys()
        except (httpx.HTTPError, PyJWKError, PyJWKSetError, ValueError) as e:
            logger.warning("apple_keys_unavailable", error=str(e))
            raise InvalidIdentityTokenError(self.name, "could not load signing keys") from e

        for key in key_set.keys:
            if key.key_id == kid:
                return key
        raise InvalidIdentityTokenError(self.name, "unknown signing key")

    async def verify(self, id_token: str) -> ExternalIdentity:
        try:
            header = jwt.get_unverified_header(id_token)
        except InvalidTokenError as e:
            raise InvalidIdentityTokenError(self.name, "malformed token") from e

        signing_key = await self._signing_key(header.get("kid"))

        try:
            payload = jwt.decode(
                id_token,
                signing_key.key,
                algorithms=["RS256"],
                issuer=self.issuer,
                audience=self.client_id,
                options={"verify_aud": self.client_id is not None, "require": ["sub", "exp"]},
            )
        except InvalidTokenError as e:
            raise InvalidIdentityTokenError(self.name, str(e)) from e

        return ExternalIdentity(subject=str(payload["sub"]), email=payload.get("email"))
