"""Schemas for sync endpoints."""

from pydantic import BaseModel, Field

from lingonotes.constants import LanguageCode
from lingonotes.schemas.base import CamelModel
from lingonotes.schemas.learning_schemas import LanguageSheet


class SyncSettings(CamelModel):
    native_language: LanguageCode | None = None


class SyncPushRequest(CamelModel):
    """Client state pushed for last-write-wins reconciliation."""

    language_sheets: list[LanguageSheet] = Field(default_factory=list)
    settings: SyncSettings = Field(default_factory=SyncSettings)
    last_local_update: int = Field(..., ge=0)


class SyncData(CamelModel):
    """The server's stored copy of a user's state."""

    language_sheets: list[LanguageSheet] = Field(default_factory=list)
    settings: SyncSettings = Field(default_factory=SyncSettings)
    updated_at: int


class SyncPushResponse(CamelModel):
    """Either ``success`` with the new data, or ``conflict`` with the server's newer data."""

    success: bool | None = None
    data: SyncData | None = None
    conflict: bool | None = None
    server_data: SyncData | None = None
    message: str | None = None


class SyncPullResponse(CamelModel):
    data: SyncData | None = None
    last_sync: int | None = None


class SyncDeleteResponse(BaseModel):
    success: bool
