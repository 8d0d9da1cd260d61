"""Sentence translation capability.

Translates exactly one protected sentence per LLM call. Failures are
returned as an explicit ``SentenceOutcome`` rather than raised, so the
pipeline owns the fallback policy.

Nothing from the sentence itself is ever logged: only the error kind and the
model identifier.
"""

import logging
from typing import Optional

from litellm.exceptions import (
    APIConnectionError,
    InternalServerError,
    RateLimitError,
    ServiceUnavailableError,
    Timeout,
)
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from visa_translator.core.errors import TranslationCapabilityError

from ..models.result import SentenceOutcome
from ..strategies import PromptStrategy, VisaStrictStrategy
from .llm_gateway import LLMGateway
from .output_processor import OutputProcessor

logger = logging.getLogger(__name__)

# Provider errors worth another attempt
TRANSIENT_ERRORS = (
    Timeout,
    RateLimitError,
    APIConnectionError,
    ServiceUnavailableError,
    InternalServerError,
    TimeoutError,
    ConnectionError,
)


def _error_kind(error: BaseException) -> str:
    if isinstance(error, TranslationCapabilityError):
        return error.kind
    if isinstance(error, (Timeout, TimeoutError)):
        return "timeout"
    if isinstance(error, RateLimitError):
        return "rate_limited"
    if isinstance(error, (APIConnectionError, ConnectionError)):
        return "connection_error"
    return "provider_error"


class SentenceTranslator:
    """One-sentence-per-call translator over an LLM gateway.

    Contract:
    - sentence-locked: each call sees a single sentence and nothing else
    - literal: the strategy's prompt forbids paraphrase and omission
    - placeholder-preserving: responses that drop or invent placeholders
      are failures
    - never raises for provider or response problems
    """

    def __init__(
        self,
        gateway: LLMGateway,
        strategy: Optional[PromptStrategy] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        """Initialize sentence translator.

        Args:
            gateway: LLM gateway to call
            strategy: Prompt strategy (defaults to visa-strict)
            max_retries: Attempts per sentence for transient provider errors
            retry_delay: Base delay in seconds for exponential backoff
        """
        self.gateway = gateway
        self.strategy = strategy or VisaStrictStrategy()
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.output_processor = OutputProcessor()

    async def translate(self, sentence: str) -> SentenceOutcome:
        """Translate one protected sentence.

        Args:
            sentence: Sentence with proper nouns replaced by placeholders

        Returns:
            SentenceOutcome, successful or failed
        """
        bundle = self.strategy.build(sentence)

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=self.retry_delay, max=10),
                retry=retry_if_exception_type(TRANSIENT_ERRORS),
                before_sleep=self._log_retry,
                reraise=True,
            ):
                with attempt:
                    response = await self.gateway.call(bundle)

            translated = self.output_processor.process(response, sentence)
        except Exception as e:
            kind = _error_kind(e)
            logger.error(
                "Sentence translation failed (no content logged): model=%s, kind=%s, error=%s",
                self.gateway.model,
                kind,
                type(e).__name__,
            )
            return SentenceOutcome.failed(kind)

        logger.debug(
            "Sentence translated: model=%s, latency=%dms, tokens=%d",
            response.model,
            response.latency_ms,
            response.usage.total_tokens,
        )
        return SentenceOutcome.ok(translated)

    async def health_check(self) -> bool:
        """Check that the underlying provider is reachable."""
        return await self.gateway.health_check()

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Retrying sentence translation: model=%s, attempt=%d/%d, error=%s",
            self.gateway.model,
            retry_state.attempt_number,
            self.max_retries,
            type(error).__name__ if error else "unknown",
        )
