from lingonotes.domain.identity.entities.principal import Principal
from lingonotes.infrastructure.identity.services import token_service


class TokenServiceAdapter:
    """Adapter wrapping token service functions for DI."""

    def create_session_token(self, principal: Principal) -> str:
        return token_service.create_session_token(principal.user_id, principal.email)

    def verify_session_token(self, token: str) -> Principal | None:
        return token_service.verify_session_token(token)
