"""Translation domain exceptions."""

from lingonotes.domain.common.exceptions import DomainError


class TranslationFailedError(DomainError):
    """Raised when the language model returns no usable output."""

    def __init__(self, reason: str) -> None:
        super().__init__("Translation failed", {"reason": reason})
        self.reason = reason
