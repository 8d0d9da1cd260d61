"""Translation package.

This package provides the proper-noun-safe, sentence-locked translation
pipeline.

Architecture:
- models/: Data models (PromptBundle, LLMResponse, TranslationResult, ...)
- strategies/: Prompt strategies for translation modes
- pipeline/: Pipeline components (LLMGateway, SentenceTranslator, ...)
- guard.py: Proper-noun protection and restoration
- segmenter.py: Sentence segmentation
- risk.py: Risk classification policies
"""

from .models import (
    # Prompt models
    Message,
    PromptBundle,
    # Response models
    TokenUsage,
    LLMResponse,
    # Result models
    RiskLevel,
    Sentence,
    SentenceOutcome,
    TranslationResult,
)
from .guard import ProtectedText, find_unverified, protect, restore
from .segmenter import Segmenter, segment
from .risk import NameLengthRiskPolicy, RiskAssessment, RiskPolicy, classify
from .pipeline import (
    LLMGateway,
    GatewayFactory,
    OutputProcessor,
    SentenceTranslator,
    TranslationPipeline,
    PipelineConfig,
    PipelineFactory,
)

__all__ = [
    # Models
    "Message",
    "PromptBundle",
    "TokenUsage",
    "LLMResponse",
    "RiskLevel",
    "Sentence",
    "SentenceOutcome",
    "TranslationResult",
    # Core steps
    "ProtectedText",
    "protect",
    "find_unverified",
    "restore",
    "Segmenter",
    "segment",
    "RiskPolicy",
    "RiskAssessment",
    "NameLengthRiskPolicy",
    "classify",
    # Pipeline
    "LLMGateway",
    "GatewayFactory",
    "OutputProcessor",
    "SentenceTranslator",
    "TranslationPipeline",
    "PipelineConfig",
    "PipelineFactory",
]
