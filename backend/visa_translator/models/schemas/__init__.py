"""API request/response schemas."""

from .translation import ErrorResponse, TranslateRequest

__all__ = [
    "ErrorResponse",
    "TranslateRequest",
]
