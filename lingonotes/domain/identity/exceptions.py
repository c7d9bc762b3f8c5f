"""Identity domain exceptions."""

from lingonotes.domain.common.exceptions import DomainError


class InvalidIdentityTokenError(DomainError):
    """Raised when a third-party identity token cannot be verified."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"Invalid {provider} token", {"provider": provider, "reason": reason})
        self.provider = provider
        self.reason = reason


class InvalidSessionTokenError(DomainError):
    """Raised when a session token is malformed, expired or badly signed."""

    def __init__(self) -> None:
        super().__init__("Invalid token")
