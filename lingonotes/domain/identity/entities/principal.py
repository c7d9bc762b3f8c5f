"""Identity value objects."""

from dataclasses import dataclass

from lingonotes.domain.common.exceptions import ValidationError


@dataclass(frozen=True)
class Principal:
    """
    The authenticated caller of a request.

    Carried by the session token and attached to every authenticated request.
    """

    user_id: str
    email: str | None = None

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValidationError("User id cannot be empty", field="user_id")


@dataclass(frozen=True)
class ExternalIdentity:
    """Identity asserted by a third-party issuer (Google, Apple) after verification."""

    subject: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None

    def to_principal(self) -> Principal:
        return Principal(user_id=self.subject, email=self.email)
