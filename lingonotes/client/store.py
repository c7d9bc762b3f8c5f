"""
Persisted client store.

Holds the user profile, onboarding flag and language sheets. Every mutation
is applied to the in-memory state synchronously and then the whole state is
serialized to storage under ``lingo-notes-storage``. The store rehydrates from
storage when constructed.
"""

from collections.abc import Callable, Mapping
from typing import Any

import structlog
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from lingonotes.client.persistence import StatePersister
from lingonotes.client.storage import KeyValueStorage
from lingonotes.constants import STORAGE_KEY, LanguageCode
from lingonotes.schemas.base import CamelModel
from lingonotes.schemas.learning_schemas import LanguageSheet, Sentence, SentenceData
from lingonotes.schemas.user_schemas import User
from lingonotes.utils import generate_id, now_ms

logger = structlog.get_logger(__name__)

# Sentence fields the caller may not overwrite through update_sentence
_IMMUTABLE_SENTENCE_FIELDS = frozenset({"id", "created_at"})


class StoreState(CamelModel):
    """Everything the store persists."""

    user: User | None = None
    has_completed_onboarding: bool = False
    language_sheets: list[LanguageSheet] = Field(default_factory=list)
    current_sheet_id: str | None = None
    # Local time of the last sheet/sentence change, and server stamp of the last sync
    last_modified_at: int = 0
    last_synced_at: int | None = None


class PersistedState(BaseModel):
    state: StoreState
    version: int = 0


class LocalStore:
    """Single state container for the client."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = STORAGE_KEY,
        debounce_seconds: float = 0.0,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        self._persister = StatePersister(storage, key, debounce_seconds)
        self._clock = clock
        self._id_factory = id_factory
        self._state = self._rehydrate()

    # --- Persistence ---

    def _rehydrate(self) -> StoreState:
        try:
            raw = self._persister.load()
        except UnicodeDecodeError as e:
            logger.warning("store_rehydrate_failed", key=self._persister.key, error=str(e))
            return StoreState()
        if raw is None:
            return StoreState()
        try:
            return PersistedState.model_validate_json(raw).state
        except PydanticValidationError as e:
            logger.warning(
                "store_rehydrate_failed", key=self._persister.key, errors=e.error_count()
            )
            return StoreState()

    def _serialize(self) -> str:
        return PersistedState(state=self._state).model_dump_json(by_alias=True)

    def _commit(self) -> None:
        self._persister.schedule(self._serialize)

    def flush(self) -> None:
        """Write any debounced state now."""
        self._persister.flush()

    def _now(self) -> int:
        return self._clock()

    def _mark_modified(self, now: int) -> None:
        self._state.last_modified_at = max(self._state.last_modified_at, now)

    # --- Read access ---

    @property
    def user(self) -> User | None:
        return self._state.user

    @property
    def has_completed_onboarding(self) -> bool:
        return self._state.has_completed_onboarding

    @property
    def language_sheets(self) -> list[LanguageSheet]:
        return list(self._state.language_sheets)

    @property
    def current_sheet_id(self) -> str | None:
        return self._state.current_sheet_id

    def snapshot(self) -> StoreState:
        """Deep copy of the current state."""
        return self._state.model_copy(deep=True)

    def last_local_update(self) -> int:
        """Timestamp a sync push should claim for the local state."""
        return max(self._state.last_modified_at, self._state.last_synced_at or 0)

    def get_sheet(self, sheet_id: str) -> LanguageSheet | None:
        return next((s for s in self._state.language_sheets if s.id == sheet_id), None)

    def get_sheet_for_language(self, target_language: LanguageCode) -> LanguageSheet | None:
        return next(
            (s for s in self._state.language_sheets if s.target_language == target_language),
            None,
        )

    def get_current_sheet(self) -> LanguageSheet | None:
        if self._state.current_sheet_id is None:
            return None
        return self.get_sheet(self._state.current_sheet_id)

    # --- User ---

    def set_user(self, user: User | None) -> None:
        self._state.user = user
        self._commit()

    def update_user(self, **changes: Any) -> None:
        """Merge changes into the user profile; ignored when signed out."""
        if self._state.user is None:
            return
        merged = self._state.user.model_dump() | changes
        self._state.user = User.model_validate(merged)
        self._commit()

    def complete_onboarding(self) -> None:
        self._state.has_completed_onboarding = True
        self._commit()

    # --- Sheets ---

    def create_sheet(self, target_language: LanguageCode) -> str:
        """
        Create a sheet for ``target_language`` and make it current.

        A language has at most one sheet: when one exists it becomes current and
        its id is returned instead.
        """
        existing = self.get_sheet_for_language(target_language)
        if existing is not None:
            self._state.current_sheet_id = existing.id
            self._commit()
            return existing.id

        now = self._now()
        sheet = LanguageSheet(
            id=self._id_factory(),
            target_language=target_language,
            sentences=[],
            created_at=now,
            updated_at=now,
        )
        self._state.language_sheets.append(sheet)
        self._state.current_sheet_id = sheet.id
        self._mark_modified(now)
        self._commit()
        return sheet.id

    def delete_sheet(self, sheet_id: str) -> None:
        before = len(self._state.language_sheets)
        self._state.language_sheets = [
            s for s in self._state.language_sheets if s.id != sheet_id
        ]
        if len(self._state.language_sheets) == before:
            return
        if self._state.current_sheet_id == sheet_id:
            self._state.current_sheet_id = None
        self._mark_modified(self._now())
        self._commit()

    def set_current_sheet(self, sheet_id: str | None) -> None:
        self._state.current_sheet_id = sheet_id
        self._commit()

    def replace_sheets(self, sheets: list[LanguageSheet], synced_at: int) -> None:
        """Adopt sheets from the server, e.g. after resolving a sync conflict."""
        self._state.language_sheets = [s.model_copy(deep=True) for s in sheets]
        if self.get_current_sheet() is None:
            self._state.current_sheet_id = sheets[0].id if sheets else None
        self.mark_synced(synced_at)

    def mark_synced(self, synced_at: int) -> None:
        self._state.last_synced_at = synced_at
        self._commit()

    # --- Sentences ---

    def add_sentence(self, sheet_id: str, data: SentenceData | Mapping[str, Any]) -> str | None:
        """
        Append a sentence to a sheet.

        Returns:
            The new sentence id, or None when no sheet has ``sheet_id``
        """
        sheet = self.get_sheet(sheet_id)
        if sheet is None:
            return None

        fields = (
            data.model_dump(exclude_none=True) if isinstance(data, SentenceData) else dict(data)
        )
        now = self._now()
        sentence = Sentence.model_validate(
            {
                **fields,
                "id": self._id_factory(),
                "created_at": now,
                "updated_at": now,
                "review_count": 0,
            }
        )
        sheet.sentences.append(sentence)
        sheet.updated_at = max(sheet.updated_at, now)
        self._mark_modified(now)
        self._commit()
        return sentence.id

    def update_sentence(self, sheet_id: str, sentence_id: str, **changes: Any) -> None:
        """Merge changes into a sentence; both it and its sheet get a fresh ``updated_at``."""
        sheet = self.get_sheet(sheet_id)
        if sheet is None:
            return
        for index, sentence in enumerate(sheet.sentences):
            if sentence.id == sentence_id:
                break
        else:
            return

        now = self._now()
        allowed = {k: v for k, v in changes.items() if k not in _IMMUTABLE_SENTENCE_FIELDS}
        sheet.sentences[index] = Sentence.model_validate(
            sentence.model_dump() | allowed | {"updated_at": max(sentence.updated_at, now)}
        )
        sheet.updated_at = max(sheet.updated_at, now)
        self._mark_modified(now)
        self._commit()

    def record_review(self, sheet_id: str, sentence_id: str) -> None:
        sheet = self.get_sheet(sheet_id)
        sentence = (
            next((s for s in sheet.sentences if s.id == sentence_id), None) if sheet else None
        )
        if sentence is None:
            return
        self.update_sentence(
            sheet_id,
            sentence_id,
            review_count=sentence.review_count + 1,
            last_reviewed_at=self._now(),
        )

    def delete_sentence(self, sheet_id: str, sentence_id: str) -> None:
        sheet = self.get_sheet(sheet_id)
        if sheet is None:
            return
        remaining = [s for s in sheet.sentences if s.id != sentence_id]
        if len(remaining) == len(sheet.sentences):
            return

        now = self._now()
        sheet.sentences = remaining
        sheet.updated_at = max(sheet.updated_at, now)
        self._mark_modified(now)
        self._commit()

    # --- Session ---

    def reset(self) -> None:
        """Clear user, onboarding flag and all sheets (sign-out)."""
        self._state = StoreState()
        self._commit()
