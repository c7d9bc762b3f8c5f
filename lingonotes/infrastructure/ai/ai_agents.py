from pydantic import BaseModel, Field
from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from lingonotes.infrastructure.ai.ai_model import get_ai_model


class SuggestionOutput(BaseModel):
    translation: str
    grammar_note: str = Field("", description="Brief grammar note, empty if nothing notable")
    similar_sentences: list[str] = Field(default_factory=list)


def get_translation_agent(source_language: str, target_language: str) -> Agent[None, str]:
    return Agent(
        get_ai_model(),
        output_type=str,
        instructions=f"""
        You are a professional translator. Translate the following text from {source_language} to {target_language}.
        Provide only the translation, nothing else.
        Keep the tone and style of the original text.
        If the text contains idioms or expressions, translate them to equivalent expressions in the target language.
        """,
        model_settings=ModelSettings(temperature=0.3, max_tokens=500),
    )


def get_suggestion_agent(target_language: str) -> Agent[None, SuggestionOutput]:
    return Agent(
        get_ai_model(),
        output_type=SuggestionOutput,
        instructions=f"""
        You are a language learning assistant. Given a sentence, provide:
        1. A natural translation
        2. A brief grammar note (if relevant)
        3. 2-3 similar useful sentences in {target_language}
        """,
        model_settings=ModelSettings(temperature=0.5, max_tokens=500),
    )
