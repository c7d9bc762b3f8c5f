"""Google ID token verification through the tokeninfo endpoint."""

import httpx
import structlog

from lingonotes.domain.identity.entities.principal import ExternalIdentity
from lingonotes.domain.identity.exceptions import InvalidIdentityTokenError

logger = structlog.get_logger(__name__)


class GoogleIdentityProvider:
    """
    Verifies Google ID tokens by asking Google's tokeninfo endpoint.

    Google checks signature and expiry; when ``client_id`` is configured the
    token's audience must match it.
    """

    name = "google"

    def __init__(
        self,
        tokeninfo_url: str,
        client_id: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.tokeninfo_url = tokeninfo_url
        self.client_id = client_id
        self.timeout = timeout
        self._transport = transport

    async def verify(self, id_token: str) -> ExternalIdentity:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.get(self.tokeninfo_url, params={"id_token": id_token})
            except httpx.HTTPError as e:
                logger.warning("google_tokeninfo_unreachable", error=str(e))
                raise InvalidIdentityTokenError(self.name, "tokeninfo request failed") from e

        if response.status_code != httpx.codes.OK:
            raise InvalidIdentityTokenError(
                self.name, f"tokeninfo returned {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidIdentityTokenError(self.name, "invalid tokeninfo response") from e
        if not isinstance(data, dict):
            raise InvalidIdentityTokenError(self.name, "invalid tokeninfo response")

        if self.client_id and data.get("aud") != self.client_id:
            raise InvalidIdentityTokenError(self.name, "audience mismatch")

        subject = data.get("sub")
        if not subject:
            raise InvalidIdentityTokenError(self.name, "missing subject")

        return ExternalIdentity(
            subject=subject,
            email=data.get("email"),
            name=data.get("name"),
            picture=data.get("picture"),
        )
