"""Database models."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from lingonotes.database import Base


class SubscriptionRow(Base):
    """Per-user subscription state."""

    __tablename__ = "subscriptions"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="free")
    expires_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    plan: Mapped[str | None] = mapped_column(String(255), nullable=True)
    modified_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SubscriptionRow(user_id={self.user_id!r}, status={self.status!r})>"


class SyncSnapshotRow(Base):
    """Per-user sync snapshot; ``updated_at`` is the server stamp in epoch ms."""

    __tablename__ = "sync_snapshots"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    language_sheets: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    settings: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    def __repr__(self) -> str:
        return f"<SyncSnapshotRow(user_id={self.user_id!r}, updated_at={self.updated_at})>"
