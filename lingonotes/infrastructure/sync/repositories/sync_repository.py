"""Repository for SyncSnapshot domain entities."""

from collections.abc import Callable

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from lingonotes.domain.sync.entities.sync_snapshot import SyncSnapshot
from lingonotes.infrastructure.sync.mappers.sync_snapshot_mapper import SyncSnapshotMapper
from lingonotes.models import SyncSnapshotRow

logger = structlog.get_logger(__name__)

Decide = Callable[[SyncSnapshot | None], SyncSnapshot | None]


class SyncRepository:
    """Sync snapshots stored as one row per user."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory
        self.mapper = SyncSnapshotMapper()

    def get(self, user_id: str) -> SyncSnapshot | None:
        with self.session_factory() as db:
            stmt = select(SyncSnapshotRow).where(SyncSnapshotRow.user_id == user_id)
            orm_model = db.execute(stmt).scalar_one_or_none()
            return self.mapper.to_domain(orm_model) if orm_model else None

    def update(self, user_id: str, decide: Decide) -> SyncSnapshot | None:
        """
        Read, decide and write inside one transaction with the row locked.

        A user's first row has nothing to lock, so two first writes can both
        insert. The loser gets an IntegrityError and decides again against the
        winner's row, which it can now lock.

        Args:
            user_id: Owner of the snapshot
            decide: Returns the snapshot to store, or None to keep the current one

        Returns:
            The snapshot stored after the call
        """
        try:
            return self._update_locked(user_id, decide)
        except IntegrityError:
            logger.info("sync_snapshot_insert_race", user_id=user_id)
            return self._update_locked(user_id, decide)

    def _update_locked(self, user_id: str, decide: Decide) -> SyncSnapshot | None:
        with self.session_factory() as db, db.begin():
            stmt = (
                select(SyncSnapshotRow)
                .where(SyncSnapshotRow.user_id == user_id)
                .with_for_update()
            )
            orm_model = db.execute(stmt).scalar_one_or_none()
            current = self.mapper.to_domain(orm_model) if orm_model else None

            replacement = decide(current)
            if replacement is None:
                return current

            if orm_model is None:
                db.add(self.mapper.to_orm(replacement))
            else:
                self.mapper.to_orm(replacement, orm_model)
            logger.debug(
                "sync_snapshot_saved", user_id=user_id, updated_at=replacement.updated_at
            )
        return replacement

    def delete(self, user_id: str) -> bool:
        with self.session_factory() as db, db.begin():
            result = db.execute(delete(SyncSnapshotRow).where(SyncSnapshotRow.user_id == user_id))
            return bool(result.rowcount)
