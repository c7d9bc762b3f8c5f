from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class TranslationSuggestion:
    translation: str
    grammar_note: str = ""
    similar_sentences: list[str] = field(default_factory=list)


class AITranslationServiceProtocol(Protocol):
    async def translate(self, text: str, source_language: str, target_language: str) -> str: ...

    async def suggest(self, sentence: str, target_language: str) -> TranslationSuggestion: ...
