"""AI translation routes (premium only)."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, status

from lingonotes.application.translation.use_cases.translation_use_case import (
    TranslationUseCase,
)
from lingonotes.core import container
from lingonotes.domain.translation.exceptions import TranslationFailedError
from lingonotes.exceptions import LingoNotesError, UpstreamServiceError
from lingonotes.infrastructure.common.dependencies import require_ai_enabled
from lingonotes.infrastructure.common.di import inject_use_case
from lingonotes.infrastructure.subscription.dependencies import PremiumPrincipal
from lingonotes.schemas.translation_schemas import (
    SuggestRequest,
    SuggestResponse,
    TranslateRequest,
    TranslateResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/translate", tags=["translate", "ai"])

TranslateUseCase = Annotated[
    TranslationUseCase, Depends(inject_use_case(container.translation_use_case))
]


@router.post("", response_model=TranslateResponse, status_code=status.HTTP_200_OK)
@require_ai_enabled
async def translate_text(
    body: TranslateRequest,
    principal: PremiumPrincipal,
    use_case: TranslateUseCase,
) -> TranslateResponse:
    """
    Translate text with the configured language model.

    Raises:
        HTTP 400: If text is empty or over 1000 characters, or a language code is not 2 letters
        HTTP 403: Without an active premium subscription
        HTTP 500: If the model call fails or returns nothing
    """
    try:
        translation = await use_case.translate(body.text, body.from_, body.to)
    except TranslationFailedError as e:
        logger.warning("translation_empty", user_id=principal.user_id, reason=e.reason)
        raise UpstreamServiceError("Translation failed") from e
    except LingoNotesError:
        raise
    except Exception as e:
        logger.error(
            "translation_failed",
            user_id=principal.user_id,
            error=str(e),
            exc_info=True,
        )
        raise UpstreamServiceError("Translation failed") from e

    return TranslateResponse(translation=translation)


@router.post("/suggest", response_model=SuggestResponse, status_code=status.HTTP_200_OK)
@require_ai_enabled
async def suggest_translation(
    body: SuggestRequest,
    principal: PremiumPrincipal,
    use_case: TranslateUseCase,
) -> SuggestResponse:
    """Translation, grammar note and similar sentences for a sentence."""
    try:
        suggestion = await use_case.suggest(body.sentence, body.target_language)
    except LingoNotesError:
        raise
    except Exception as e:
        logger.error(
            "translation_suggestion_failed",
            user_id=principal.user_id,
            error=str(e),
            exc_info=True,
        )
        raise UpstreamServiceError("Failed to get suggestions") from e

    return SuggestResponse(
        translation=suggestion.translation,
        grammar_note=suggestion.grammar_note,
        similar_sentences=suggestion.similar_sentences,
    )
