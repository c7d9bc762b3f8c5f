"""Schemas for translation endpoints."""

from pydantic import BaseModel, Field

from lingonotes.schemas.base import CamelModel

MAX_TRANSLATION_TEXT_LENGTH = 1000


class TranslateRequest(BaseModel):
    """Text to translate between two ISO 639-1 language codes."""

    text: str = Field(..., min_length=1, max_length=MAX_TRANSLATION_TEXT_LENGTH)
    from_: str = Field(..., alias="from", min_length=2, max_length=2)
    to: str = Field(..., min_length=2, max_length=2)

    model_config = {"populate_by_name": True}


class TranslateResponse(BaseModel):
    translation: str


class SuggestRequest(CamelModel):
    sentence: str = Field(..., min_length=1, max_length=MAX_TRANSLATION_TEXT_LENGTH)
    target_language: str = Field(..., min_length=2, max_length=2)


class SuggestResponse(CamelModel):
    translation: str
    grammar_note: str = ""
    similar_sentences: list[str] = Field(default_factory=list)
