"""Use case for AI translation."""

import structlog

from lingonotes.application.translation.protocols.ai_translation_service import (
    AITranslationServiceProtocol,
    TranslationSuggestion,
)
from lingonotes.domain.translation.exceptions import TranslationFailedError

logger = structlog.get_logger(__name__)


class TranslationUseCase:
    def __init__(self, ai_service: AITranslationServiceProtocol) -> None:
        self.ai_service = ai_service

    async def translate(self, text: str, source_language: str, target_language: str) -> str:
        """
        Translate text between two languages.

        Raises:
            TranslationFailedError: If the model returns an empty translation
        """
        translation = (
            await self.ai_service.translate(text, source_language, target_language)
        ).strip()
        if not translation:
            raise TranslationFailedError("empty model output")

        logger.debug(
            "text_translated",
            source_language=source_language,
            target_language=target_language,
            length=len(text),
        )
        return translation

    async def suggest(self, sentence: str, target_language: str) -> TranslationSuggestion:
        """Translation, grammar note and similar sentences for a sentence."""
        suggestion = await self.ai_service.suggest(sentence, target_language)
        if not suggestion.translation.strip():
            raise TranslationFailedError("empty model output")
        return TranslationSuggestion(
            translation=suggestion.translation.strip(),
            grammar_note=suggestion.grammar_note.strip(),
            similar_sentences=[s.strip() for s in suggestion.similar_sentences if s.strip()],
        )
