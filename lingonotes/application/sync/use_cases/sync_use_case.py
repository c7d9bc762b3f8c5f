"""Use case for last-write-wins synchronization of client state."""

from dataclasses import dataclass
from typing import Any

import structlog

from lingonotes.application.common.clock import Clock
from lingonotes.application.sync.protocols.sync_repository import SyncRepositoryProtocol
from lingonotes.domain.sync.entities.sync_snapshot import SyncSnapshot

logger = structlog.get_logger(__name__)


@dataclass
class SyncPushResult:
    """Outcome of a push: the stored snapshot, or the newer server snapshot on conflict."""

    snapshot: SyncSnapshot
    conflict: bool = False


class SyncUseCase:
    """
    Push, pull and delete a user's sync snapshot.

    A push is rejected when the stored snapshot's ``updated_at`` is strictly
    newer than the client's ``last_local_update``; otherwise the stored
    snapshot is replaced and stamped with the server clock. Conflicts are
    reported to the caller, never merged.
    """

    def __init__(self, repository: SyncRepositoryProtocol, clock: Clock) -> None:
        self.repository = repository
        self.clock = clock

    def pull(self, user_id: str) -> SyncSnapshot | None:
        return self.repository.get(user_id)

    def push(
        self,
        user_id: str,
        language_sheets: list[dict[str, Any]],
        settings: dict[str, Any],
        last_local_update: int,
    ) -> SyncPushResult:
        """
        Store the client's state unless the server holds newer data.

        Args:
            user_id: Owner of the snapshot
            language_sheets: Serialized language sheets
            settings: Serialized client settings
            last_local_update: Client timestamp (epoch ms) of the pushed state

        Returns:
            SyncPushResult with the snapshot now stored, or the conflicting one
        """
        conflicting: SyncSnapshot | None = None

        def decide(current: SyncSnapshot | None) -> SyncSnapshot | None:
            nonlocal conflicting
            if current is not None and current.is_newer_than(last_local_update):
                conflicting = current
                return None
            return SyncSnapshot.create(user_id, language_sheets, settings, now=self.clock())

        stored = self.repository.update(user_id, decide)

        if conflicting is not None:
            logger.info(
                "sync_push_conflict",
                user_id=user_id,
                last_local_update=last_local_update,
                server_updated_at=conflicting.updated_at,
            )
            return SyncPushResult(snapshot=conflicting, conflict=True)

        # decide() always returns a snapshot when there is no conflict
        assert stored is not None
        logger.info(
            "sync_push_stored",
            user_id=user_id,
            sheet_count=len(language_sheets),
            updated_at=stored.updated_at,
        )
        return SyncPushResult(snapshot=stored)

    def delete(self, user_id: str) -> bool:
        deleted = self.repository.delete(user_id)
        logger.info("sync_snapshot_deleted", user_id=user_id, existed=deleted)
        return deleted
