"""Last-write-wins sync between the local store and the server mirror."""

from dataclasses import dataclass

import structlog

from lingonotes.client.api_client import LingoNotesClient
from lingonotes.client.store import LocalStore
from lingonotes.schemas.sync_schemas import SyncData, SyncSettings

logger = structlog.get_logger(__name__)


@dataclass
class SyncResult:
    success: bool
    conflict: bool = False
    data: SyncData | None = None
    server_data: SyncData | None = None


class SyncClient:
    """
    Pushes and pulls the store's language sheets.

    A conflicting push never touches local state; the caller chooses between
    ``accept_server_data`` and retrying with a later ``last_local_update``.
    """

    def __init__(self, store: LocalStore, api: LingoNotesClient) -> None:
        self.store = store
        self.api = api

    def _settings(self) -> SyncSettings:
        user = self.store.user
        return SyncSettings(native_language=user.native_language if user else None)

    async def push(self, last_local_update: int | None = None) -> SyncResult:
        claimed = self.store.last_local_update() if last_local_update is None else last_local_update
        response = await self.api.push_sync(
            self.store.language_sheets, self._settings(), last_local_update=claimed
        )

        if response.conflict:
            logger.info(
                "sync_conflict",
                last_local_update=claimed,
                server_updated_at=response.server_data.updated_at if response.server_data else None,
            )
            return SyncResult(success=False, conflict=True, server_data=response.server_data)

        if response.data is not None:
            self.store.mark_synced(response.data.updated_at)
        return SyncResult(success=bool(response.success), data=response.data)

    async def pull(self) -> SyncData | None:
        """Fetch the server copy without applying it."""
        response = await self.api.pull_sync()
        return response.data

    def accept_server_data(self, data: SyncData) -> None:
        """Replace local sheets (and native language) with the server's copy."""
        self.store.replace_sheets(data.language_sheets, synced_at=data.updated_at)
        if data.settings.native_language is not None:
            self.store.update_user(native_language=data.settings.native_language)
        logger.info("sync_server_data_applied", updated_at=data.updated_at)

    async def delete(self) -> bool:
        response = await self.api.delete_sync()
        return response.success
