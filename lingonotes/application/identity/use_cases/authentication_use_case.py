"""Use case for authentication operations."""

import structlog

from lingonotes.application.identity.protocols.identity_provider import IdentityProviderProtocol
from lingonotes.application.identity.protocols.token_service import TokenServiceProtocol
from lingonotes.domain.identity.entities.principal import ExternalIdentity, Principal
from lingonotes.domain.identity.exceptions import InvalidSessionTokenError

logger = structlog.get_logger(__name__)


class AuthenticationUseCase:
    """Exchange third-party identity tokens for session tokens and verify session tokens."""

    def __init__(
        self,
        google_provider: IdentityProviderProtocol,
        apple_provider: IdentityProviderProtocol,
        token_service: TokenServiceProtocol,
    ) -> None:
        """Initialize use case with dependencies."""
        self.google_provider = google_provider
        self.apple_provider = apple_provider
        self.token_service = token_service

    async def sign_in_with_google(self, id_token: str) -> tuple[ExternalIdentity, str]:
        """
        Sign in with a Google ID token.

        Args:
            id_token: ID token obtained by the app from Google Sign-In

        Returns:
            Tuple of (verified identity, session token)

        Raises:
            InvalidIdentityTokenError: If Google rejects the token
        """
        identity = await self.google_provider.verify(id_token)
        token = self.token_service.create_session_token(identity.to_principal())

        logger.info("user_signed_in", provider="google", user_id=identity.subject)
        return identity, token

    async def sign_in_with_apple(
        self,
        id_token: str,
        fallback_email: str | None = None,
        name: str | None = None,
    ) -> tuple[ExternalIdentity, str]:
        """
        Sign in with an Apple identity token.

        Apple only includes the email in the token when the user shares it, and
        only sends the name on the first sign-in, so the app forwards both.

        Args:
            id_token: Identity token from Sign in with Apple
            fallback_email: Email reported by the app when the token carries none
            name: Display name reported by the app

        Returns:
            Tuple of (verified identity, session token)

        Raises:
            InvalidIdentityTokenError: If the token fails verification
        """
        verified = await self.apple_provider.verify(id_token)
        identity = ExternalIdentity(
            subject=verified.subject,
            email=verified.email or fallback_email,
            name=name,
        )
        token = self.token_service.create_session_token(identity.to_principal())

        logger.info("user_signed_in", provider="apple", user_id=identity.subject)
        return identity, token

    def verify_session(self, token: str) -> Principal:
        """
        Verify a session token.

        Raises:
            InvalidSessionTokenError: If the token is malformed, expired or badly signed
        """
        principal = self.token_service.verify_session_token(token)
        if principal is None:
            raise InvalidSessionTokenError
        return principal
