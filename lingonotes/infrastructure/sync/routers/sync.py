"""Sync routes: last-write-wins mirror of the client's language sheets."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends

from lingonotes.application.sync.use_cases.sync_use_case import SyncUseCase
from lingonotes.core import container
from lingonotes.domain.sync.entities.sync_snapshot import SyncSnapshot
from lingonotes.exceptions import LingoNotesError
from lingonotes.infrastructure.common.di import inject_use_case
from lingonotes.infrastructure.identity.dependencies import CurrentPrincipal
from lingonotes.infrastructure.subscription.dependencies import PremiumPrincipal
from lingonotes.schemas.sync_schemas import (
    SyncData,
    SyncDeleteResponse,
    SyncPullResponse,
    SyncPushRequest,
    SyncPushResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/sync", tags=["sync"])

SyncUseCaseDep = Annotated[SyncUseCase, Depends(inject_use_case(container.sync_use_case))]


def _to_sync_data(snapshot: SyncSnapshot) -> SyncData:
    return SyncData.model_validate(
        {
            "languageSheets": snapshot.language_sheets,
            "settings": snapshot.settings,
            "updatedAt": snapshot.updated_at,
        }
    )


@router.get("")
def pull(principal: CurrentPrincipal, use_case: SyncUseCaseDep) -> SyncPullResponse:
    """Get the stored snapshot, or nulls when the user never pushed."""
    snapshot = use_case.pull(principal.user_id)
    if snapshot is None:
        return SyncPullResponse(data=None, last_sync=None)
    return SyncPullResponse(data=_to_sync_data(snapshot), last_sync=snapshot.updated_at)


@router.post("", response_model=SyncPushResponse, response_model_exclude_none=True)
def push(
    body: SyncPushRequest,
    principal: PremiumPrincipal,
    use_case: SyncUseCaseDep,
) -> SyncPushResponse:
    """
    Push local state.

    Returns ``{success, data}`` when stored, or ``{conflict, serverData}`` when
    the server already holds newer data; the client decides what to do next.
    """
    try:
        result = use_case.push(
            principal.user_id,
            language_sheets=[sheet.to_json_dict() for sheet in body.language_sheets],
            settings=body.settings.to_json_dict(),
            last_local_update=body.last_local_update,
        )
    except LingoNotesError:
        raise
    except Exception as e:
        logger.error("sync_push_failed", user_id=principal.user_id, error=str(e), exc_info=True)
        raise LingoNotesError("Sync failed") from e

    if result.conflict:
        return SyncPushResponse(
            conflict=True,
            server_data=_to_sync_data(result.snapshot),
            message="Server has newer data",
        )
    return SyncPushResponse(success=True, data=_to_sync_data(result.snapshot))


@router.delete("")
def delete(principal: CurrentPrincipal, use_case: SyncUseCaseDep) -> SyncDeleteResponse:
    """Remove the stored snapshot."""
    use_case.delete(principal.user_id)
    return SyncDeleteResponse(success=True)
