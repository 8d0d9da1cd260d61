"""Main translation pipeline orchestrator.

This module provides the TranslationPipeline class that coordinates
all pipeline components for one translate request.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from visa_translator.config import Settings
from visa_translator.core.errors import ConfigurationError
from visa_translator.core.glossary import VocabularyStore

from ..guard import find_unverified, protect, restore
from ..models.result import Sentence, SentenceOutcome, TranslationResult
from ..risk import RiskPolicy, default_risk_policy
from ..segmenter import Segmenter
from ..strategies import VisaStrictStrategy
from .llm_gateway import GatewayFactory
from .sentence_translator import SentenceTranslator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for translation pipeline."""

    provider: str
    model: str
    api_key: str
    base_url: Optional[str] = None
    temperature: float = 0.1
    max_tokens: int = 1024
    timeout: Optional[float] = None
    max_retries: int = 3
    retry_delay: float = 1.0
    max_concurrency: int = 8


class TranslationPipeline:
    """Orchestrator for proper-noun-safe, sentence-locked translation.

    Flow:
    protect -> find unverified -> segment -> translate (per sentence,
    concurrently) -> restore -> classify -> TranslationResult

    Requests share nothing but the read-only vocabulary.
    """

    # Joins sentence translations into the full output
    SENTENCE_SEPARATOR = " "

    def __init__(
        self,
        translator: SentenceTranslator,
        vocabulary_store: VocabularyStore,
        risk_policy: Optional[RiskPolicy] = None,
        segmenter: Optional[Segmenter] = None,
        max_concurrency: int = 8,
    ):
        """Initialize translation pipeline.

        Args:
            translator: Sentence translation capability
            vocabulary_store: Source of the cached glossary
            risk_policy: Risk classification strategy
            segmenter: Sentence segmenter
            max_concurrency: Maximum in-flight sentence calls per request
        """
        self.translator = translator
        self.vocabulary_store = vocabulary_store
        self.risk_policy = risk_policy or default_risk_policy
        self.segmenter = segmenter or Segmenter()
        self.max_concurrency = max(1, max_concurrency)

    async def run(self, text: str) -> TranslationResult:
        """Execute the full translation pipeline for one request.

        Args:
            text: Raw applicant text

        Returns:
            Assembled TranslationResult
        """
        vocabulary = self.vocabulary_store.load()

        # 1. Protect known proper nouns
        protected = protect(text, vocabulary)

        # 2. Detect proper nouns the glossary cannot vouch for
        unverified = find_unverified(text, vocabulary)

        # 3. Segment original and protected text in lockstep
        original_sentences = self.segmenter.segment(text)
        protected_sentences = self.segmenter.segment(protected.protected_text)
        if len(original_sentences) != len(protected_sentences):
            logger.warning(
                "Sentence alignment mismatch (%d original vs %d protected); "
                "translating as a single sentence",
                len(original_sentences),
                len(protected_sentences),
            )
            original_sentences = [text.strip()] if text.strip() else []
            protected_sentences = (
                [protected.protected_text.strip()] if original_sentences else []
            )

        # 4. Translate every sentence independently
        outcomes = await self._translate_all(protected_sentences)
        translated_sentences = [
            outcome.text if outcome.success else source
            for outcome, source in zip(outcomes, protected_sentences)
        ]

        failures = sum(1 for outcome in outcomes if not outcome.success)
        if failures:
            logger.warning(
                "%d of %d sentences fell back to the untranslated text",
                failures,
                len(outcomes),
            )

        # 5. Restore verified renderings in the whole and in each sentence
        output_text = restore(
            self.SENTENCE_SEPARATOR.join(translated_sentences),
            protected.placeholder_map,
        )
        sentences = [
            Sentence(
                original=original,
                translated=restore(translated, protected.placeholder_map),
            )
            for original, translated in zip(original_sentences, translated_sentences)
        ]

        # 6. Classify risk from the unverified findings
        assessment = self.risk_policy.classify(unverified)

        logger.info(
            "Translation complete: sentences=%d, applied_terms=%d, unverified=%d, risk=%s",
            len(sentences),
            len(protected.applied_terms),
            len(unverified),
            assessment.risk_level.value,
        )

        # 7. Assemble
        return TranslationResult(
            output_text=output_text,
            risk_level=assessment.risk_level,
            warnings=list(assessment.warnings),
            applied_glossary=list(protected.applied_terms),
            sentences=sentences,
        )

    async def _translate_all(self, sentences: List[str]) -> List[SentenceOutcome]:
        """Fan out one call per sentence and wait for all of them.

        Results keep input order regardless of completion order.
        """
        if not sentences:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def translate_one(sentence: str) -> SentenceOutcome:
            async with semaphore:
                return await self.translator.translate(sentence)

        return list(await asyncio.gather(*(translate_one(s) for s in sentences)))

    async def health_check(self) -> bool:
        """Check that the translation capability is reachable."""
        return await self.translator.health_check()


class PipelineFactory:
    """Factory for creating translation pipelines."""

    @staticmethod
    def create(
        config: PipelineConfig,
        vocabulary_store: VocabularyStore,
        risk_policy: Optional[RiskPolicy] = None,
    ) -> TranslationPipeline:
        """Create a configured translation pipeline.

        Args:
            config: Pipeline configuration
            vocabulary_store: Glossary store shared across requests
            risk_policy: Optional risk policy override

        Returns:
            Configured TranslationPipeline
        """
        gateway = GatewayFactory.create(
            provider=config.provider,
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url,
            timeout=config.timeout,
        )
        translator = SentenceTranslator(
            gateway=gateway,
            strategy=VisaStrictStrategy(
                temperature=config.temperature,
                max_tokens=config.max_tokens,
            ),
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
        )
        return TranslationPipeline(
            translator=translator,
            vocabulary_store=vocabulary_store,
            risk_policy=risk_policy,
            max_concurrency=config.max_concurrency,
        )

    @staticmethod
    def config_from_settings(settings: Settings) -> PipelineConfig:
        """Build pipeline configuration from application settings.

        Raises:
            ConfigurationError: If no API key is configured for the provider
        """
        if not settings.openai_api_key:
            raise ConfigurationError("Translation API key not configured")

        return PipelineConfig(
            provider=settings.llm_provider,
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            temperature=settings.translation_temperature,
            max_tokens=settings.translation_max_tokens,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
            max_concurrency=settings.max_concurrency,
        )
