"""
Sync snapshot entity.

The server keeps one snapshot per user: the last pushed copy of the
client's language sheets and settings. Reconciliation is last-write-wins
on a single scalar timestamp; there is no per-field merge.
"""

from dataclasses import dataclass, field
from typing import Any

from lingonotes.domain.common.exceptions import ValidationError


@dataclass
class SyncSnapshot:
    """A user's server-side mirror of their client state."""

    user_id: str
    language_sheets: list[dict[str, Any]] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)
    updated_at: int = 0

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.user_id:
            raise ValidationError("User id cannot be empty", field="user_id")
        if self.updated_at < 0:
            raise ValidationError(
                "Timestamp cannot be negative", field="updated_at", value=self.updated_at
            )

    def is_newer_than(self, last_local_update: int) -> bool:
        """
        Check whether this snapshot wins over a push made at ``last_local_update``.

        Ties go to the pushing client.
        """
        return self.updated_at > last_local_update

    @classmethod
    def create(
        cls,
        user_id: str,
        language_sheets: list[dict[str, Any]],
        settings: dict[str, Any],
        now: int,
    ) -> "SyncSnapshot":
        """Create a snapshot stamped with the server's clock."""
        return cls(
            user_id=user_id,
            language_sheets=language_sheets,
            settings=settings,
            updated_at=now,
        )
