"""Process-local sync snapshot repository."""

import copy
from collections.abc import Callable

from lingonotes.domain.sync.entities.sync_snapshot import SyncSnapshot
from lingonotes.infrastructure.common.keyed_lock import KeyedLock


class InMemorySyncRepository:
    """Sync snapshots held in process memory; lost on restart."""

    def __init__(self) -> None:
        self._snapshots: dict[str, SyncSnapshot] = {}
        self._locks = KeyedLock()

    def get(self, user_id: str) -> SyncSnapshot | None:
        snapshot = self._snapshots.get(user_id)
        return copy.deepcopy(snapshot) if snapshot else None

    def update(
        self, user_id: str, decide: Callable[[SyncSnapshot | None], SyncSnapshot | None]
    ) -> SyncSnapshot | None:
        with self._locks.hold(user_id):
            current = copy.deepcopy(self._snapshots.get(user_id))
            replacement = decide(current)
            if replacement is None:
                return current
            self._snapshots[user_id] = copy.deepcopy(replacement)
            return replacement

    def delete(self, user_id: str) -> bool:
        with self._locks.hold(user_id):
            return self._snapshots.pop(user_id, None) is not None
