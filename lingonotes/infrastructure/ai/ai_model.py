from functools import lru_cache

from pydantic_ai.models import Model
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.anthropic import AnthropicProvider
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.ollama import OllamaProvider
from pydantic_ai.providers.openai import OpenAIProvider

from lingonotes.config import Settings, get_settings


def build_model(settings: Settings) -> Model:
    """
    Build the translation model for the configured AI provider.

    Settings validation guarantees the model name and the provider's
    credentials are present whenever ``AI_PROVIDER`` is set.

    Raises:
        RuntimeError: If no AI provider is configured
    """
    model_name = settings.AI_MODEL_NAME
    match settings.AI_PROVIDER:
        case "ollama":
            assert model_name is not None and settings.OPENAI_BASE_URL is not None
            return OpenAIChatModel(
                model_name=model_name,
                provider=OllamaProvider(base_url=settings.OPENAI_BASE_URL),
            )
        case "openai":
            assert model_name is not None and settings.OPENAI_API_KEY is not None
            return OpenAIChatModel(
                model_name=model_name,
                provider=OpenAIProvider(api_key=settings.OPENAI_API_KEY),
            )
        case "anthropic":
            assert model_name is not None and settings.ANTHROPIC_API_KEY is not None
            return AnthropicModel(
                model_name=model_name,
                provider=AnthropicProvider(api_key=settings.ANTHROPIC_API_KEY),
            )
        case "google":
            assert model_name is not None and settings.GEMINI_API_KEY is not None
            return GoogleModel(
                model_name=model_name,
                provider=GoogleProvider(api_key=settings.GEMINI_API_KEY),
            )
    raise RuntimeError(f"No AI model provider configured (AI_PROVIDER={settings.AI_PROVIDER!r})")


@lru_cache
def get_ai_model() -> Model:
    """Translation model, built on first use so provider SDKs stay idle until then."""
    return build_model(get_settings())
