from typing import Protocol

from lingonotes.domain.identity.entities.principal import ExternalIdentity


class IdentityProviderProtocol(Protocol):
    """Verifies an ID token issued by a third-party identity provider."""

    name: str

    async def verify(self, id_token: str) -> ExternalIdentity: ...
