from collections.abc import Callable
from typing import Protocol

from lingonotes.domain.sync.entities.sync_snapshot import SyncSnapshot


class SyncRepositoryProtocol(Protocol):
    def get(self, user_id: str) -> SyncSnapshot | None: ...

    def update(
        self, user_id: str, decide: Callable[[SyncSnapshot | None], SyncSnapshot | None]
    ) -> SyncSnapshot | None:
        """
        Atomically read the stored snapshot and optionally replace it.

        ``decide`` receives the stored snapshot (or None) and returns the
        snapshot to store, or None to leave storage untouched. Returns the
        snapshot stored after the call.
        """
        ...

    def delete(self, user_id: str) -> bool: ...
