"""Translation API routes."""

import logging

from fastapi import APIRouter

from visa_translator.api.dependencies import Pipeline
from visa_translator.config import settings
from visa_translator.core.errors import InvalidRequestError
from visa_translator.core.translation.models import TranslationResult
from visa_translator.core.translation.strategies import STRATEGIES
from visa_translator.models.schemas import ErrorResponse, TranslateRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/translate",
    response_model=TranslationResult,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def translate(request: TranslateRequest, pipeline: Pipeline):
    """Translate Japanese free text into English.

    Known proper nouns are locked to their glossary renderings, each sentence
    is translated independently, and the result carries a risk level for
    human review.
    """
    text = request.text
    if not text.strip():
        raise InvalidRequestError("Invalid text input")

    mode = request.mode
    if mode not in STRATEGIES:
        raise InvalidRequestError("Only visa-strict mode is supported")

    if len(text) > settings.max_text_length:
        raise InvalidRequestError(
            f"Text exceeds maximum length of {settings.max_text_length} characters"
        )

    logger.info("Translate request: mode=%s, length=%d", mode, len(text))
    return await pipeline.run(text)
