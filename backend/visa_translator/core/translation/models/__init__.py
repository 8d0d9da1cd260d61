"""Translation pipeline data models.

This module provides structured data models for the translation pipeline,
ensuring type safety and clear contracts between components.
"""

from .prompt import Message, PromptBundle
from .response import TokenUsage, LLMResponse
from .result import (
    RiskLevel,
    Sentence,
    SentenceOutcome,
    TranslationResult,
)

__all__ = [
    # Prompt models
    "Message",
    "PromptBundle",
    # Response models
    "TokenUsage",
    "LLMResponse",
    # Result models
    "RiskLevel",
    "Sentence",
    "SentenceOutcome",
    "TranslationResult",
]
