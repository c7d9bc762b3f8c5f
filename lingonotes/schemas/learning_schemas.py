"""Schemas for language sheets and sentences."""

from pydantic import Field

from lingonotes.constants import LanguageCode
from lingonotes.schemas.base import CamelModel


class SentenceData(CamelModel):
    """Caller-supplied sentence fields; the store stamps id, timestamps and review count."""

    original: str
    translation: str
    source_language: LanguageCode
    target_language: LanguageCode
    notes: str | None = None
    tags: list[str] | None = None
    last_reviewed_at: int | None = None
    ai_generated: bool | None = None


class Sentence(SentenceData):
    """A learned sentence belonging to exactly one language sheet."""

    id: str
    created_at: int
    updated_at: int
    review_count: int = Field(0, ge=0)


class LanguageSheet(CamelModel):
    """A per-target-language collection of sentences."""

    id: str
    target_language: LanguageCode
    sentences: list[Sentence] = Field(default_factory=list)
    created_at: int
    updated_at: int
