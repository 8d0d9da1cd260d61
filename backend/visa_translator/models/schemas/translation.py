"""Request and error schemas for the translate endpoint.

The success body is ``TranslationResult`` itself, serialized with camelCase
aliases.
"""

from pydantic import BaseModel, Field, StrictStr


class TranslateRequest(BaseModel):
    """Body of ``POST /translate``."""

    text: StrictStr = Field(..., description="Japanese free text to translate")
    mode: str = Field(..., description='Translation mode; only "visa-strict" is supported')


class ErrorResponse(BaseModel):
    """Coarse, user-visible error. Diagnostic detail stays in server logs."""

    error: str
