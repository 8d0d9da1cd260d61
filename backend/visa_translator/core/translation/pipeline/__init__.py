"""Translation pipeline components.

This module provides the core pipeline components for translation:
- LLMGateway: Unified interface for LLM providers
- OutputProcessor: Processes raw LLM responses
- SentenceTranslator: One-sentence-per-call translation capability
- TranslationPipeline: Orchestrates the complete flow
"""

from .llm_gateway import LLMGateway, LiteLLMGateway, GatewayFactory
from .output_processor import OutputProcessor
from .sentence_translator import SentenceTranslator
from .pipeline import TranslationPipeline, PipelineConfig, PipelineFactory

__all__ = [
    "LLMGateway",
    "LiteLLMGateway",
    "GatewayFactory",
    "OutputProcessor",
    "SentenceTranslator",
    "TranslationPipeline",
    "PipelineConfig",
    "PipelineFactory",
]
