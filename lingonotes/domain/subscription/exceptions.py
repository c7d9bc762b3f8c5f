"""Subscription domain exceptions."""

from lingonotes.domain.common.exceptions import DomainError


class ReceiptVerificationUnavailableError(DomainError):
    """Raised when a store receipt cannot be verified on this deployment."""

    def __init__(self, platform: str) -> None:
        super().__init__("Receipt verification not implemented", {"platform": platform})
        self.platform = platform
