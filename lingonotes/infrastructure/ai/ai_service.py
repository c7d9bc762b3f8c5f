from lingonotes.application.translation.protocols.ai_translation_service import (
    TranslationSuggestion,
)
from lingonotes.infrastructure.ai.ai_agents import get_suggestion_agent, get_translation_agent


class AIService:
    async def translate(self, text: str, source_language: str, target_language: str) -> str:
        agent = get_translation_agent(source_language, target_language)
        result = await agent.run(text)
        return result.output

    async def suggest(self, sentence: str, target_language: str) -> TranslationSuggestion:
        agent = get_suggestion_agent(target_language)
        result = await agent.run(sentence)
        return TranslationSuggestion(
            translation=result.output.translation,
            grammar_note=result.output.grammar_note,
            similar_sentences=result.output.similar_sentences,
        )
