"""Custom exception hierarchy for the LingoNotes API."""

from lingonotes.constants import SUBSCRIPTION_REQUIRED_CODE


class LingoNotesError(Exception):
    """Base exception for all errors rendered at the route boundary."""

    def __init__(self, message: str, status_code: int = 500, code: str | None = None) -> None:
        """Initialize exception with message, status code and optional machine code."""
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(self.message)


class AuthenticationError(LingoNotesError):
    """Missing, malformed or expired credentials."""

    def __init__(self, message: str = "Unauthorized") -> None:
        """Initialize with message and 401 status code."""
        super().__init__(message, status_code=401)


class SubscriptionRequiredError(LingoNotesError):
    """The route needs an active premium subscription."""

    def __init__(self) -> None:
        """Initialize with 403 status code and the SUBSCRIPTION_REQUIRED code."""
        super().__init__(
            "Premium subscription required",
            status_code=403,
            code=SUBSCRIPTION_REQUIRED_CODE,
        )


class UpstreamServiceError(LingoNotesError):
    """An identity or LLM provider call failed."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize with a generic message safe to show to the caller."""
        super().__init__(message, status_code=status_code)


class NotImplementedFeatureError(LingoNotesError):
    """Placeholder endpoint with no production implementation."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 501 status code."""
        super().__init__(message, status_code=501)


class AIFeaturesDisabledError(LingoNotesError):
    """No AI provider is configured on this server."""

    def __init__(self) -> None:
        """Initialize with 410 status code."""
        super().__init__("AI features are not enabled on this server", status_code=410)
