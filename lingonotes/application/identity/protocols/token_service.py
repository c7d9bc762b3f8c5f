from typing import Protocol

from lingonotes.domain.identity.entities.principal import Principal


class TokenServiceProtocol(Protocol):
    def create_session_token(self, principal: Principal) -> str: ...

    def verify_session_token(self, token: str) -> Principal | None: ...
