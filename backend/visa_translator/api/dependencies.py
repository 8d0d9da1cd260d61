"""API dependencies for the translation pipeline and authentication.

This module provides:
- The translation pipeline dependency, built from settings
- Optional API key authentication for the glossary admin endpoints
"""

import logging
import secrets
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException

from visa_translator.config import settings
from visa_translator.core.glossary import VocabularyStore, get_vocabulary_store
from visa_translator.core.translation.pipeline import (
    PipelineConfig,
    PipelineFactory,
    TranslationPipeline,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Authentication Dependencies
# =============================================================================


async def verify_api_token(
    authorization: Annotated[Optional[str], Header()] = None,
    x_api_key: Annotated[Optional[str], Header(alias="X-API-Key")] = None,
) -> bool:
    """Verify API token for admin endpoints.

    Supports two authentication methods:
    1. Authorization: Bearer <token>
    2. X-API-Key: <token>

    If API_AUTH_TOKEN is not set in environment, authentication is disabled
    (for local development).

    Raises:
        HTTPException: 401 if auth is required but token is invalid/missing
    """
    if not settings.api_auth_token:
        return True

    token = None
    if authorization and authorization.startswith("Bearer "):
        token = authorization[7:]
    elif x_api_key:
        token = x_api_key

    if not token:
        raise HTTPException(
            status_code=401,
            detail="Authentication required. Provide Authorization: Bearer <token> or X-API-Key header.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Use constant-time comparison to prevent timing attacks
    if not secrets.compare_digest(token, settings.api_auth_token):
        raise HTTPException(
            status_code=401,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return True


RequireAuth = Annotated[bool, Depends(verify_api_token)]


# =============================================================================
# Pipeline Dependencies
# =============================================================================


@lru_cache(maxsize=4)
def _build_pipeline(config: PipelineConfig) -> TranslationPipeline:
    return PipelineFactory.create(config, get_vocabulary_store())


def get_translation_pipeline() -> TranslationPipeline:
    """Get the translation pipeline for the current settings.

    Raises:
        ConfigurationError: If the translation capability is not configured
    """
    return _build_pipeline(PipelineFactory.config_from_settings(settings))


Pipeline = Annotated[TranslationPipeline, Depends(get_translation_pipeline)]
Vocabularies = Annotated[VocabularyStore, Depends(get_vocabulary_store)]
