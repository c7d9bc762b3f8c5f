"""Mapper for SyncSnapshot ORM ↔ Domain conversion."""

from lingonotes.domain.sync.entities.sync_snapshot import SyncSnapshot
from lingonotes.models import SyncSnapshotRow


class SyncSnapshotMapper:
    """Mapper for SyncSnapshot ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: SyncSnapshotRow) -> SyncSnapshot:
        """Convert ORM model to domain entity."""
        return SyncSnapshot(
            user_id=orm_model.user_id,
            language_sheets=list(orm_model.language_sheets),
            settings=dict(orm_model.settings),
            updated_at=orm_model.updated_at,
        )

    def to_orm(
        self, domain_entity: SyncSnapshot, orm_model: SyncSnapshotRow | None = None
    ) -> SyncSnapshotRow:
        """Convert domain entity to ORM model."""
        if orm_model:
            orm_model.language_sheets = domain_entity.language_sheets
            orm_model.settings = domain_entity.settings
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return SyncSnapshotRow(
            user_id=domain_entity.user_id,
            language_sheets=domain_entity.language_sheets,
            settings=domain_entity.settings,
            updated_at=domain_entity.updated_at,
        )
