"""LLM Gateway for unified provider access.

This module provides an abstract gateway interface for LLM providers,
along with a unified implementation using LiteLLM.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from ..models.prompt import PromptBundle
from ..models.response import LLMResponse, TokenUsage
from litellm import acompletion

logger = logging.getLogger(__name__)


class LLMGateway(ABC):
    """Abstract gateway for LLM providers.

    Provides a unified interface for making LLM calls, regardless of
    the underlying provider (OpenAI, Anthropic, etc.).
    """

    @property
    @abstractmethod
    def provider(self) -> str:
        """Get provider name."""
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        """Get model identifier."""
        pass

    @abstractmethod
    async def call(self, bundle: PromptBundle) -> LLMResponse:
        """Make an LLM call.

        Args:
            bundle: Prompt bundle with messages and configuration

        Returns:
            LLMResponse with content and metadata
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the provider is available.

        Returns:
            True if provider is reachable
        """
        pass


class LiteLLMGateway(LLMGateway):
    """Unified Gateway for all providers using LiteLLM."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        provider_name: str = "openai",
        timeout: Optional[float] = None,
    ):
        """Initialize LiteLLM gateway.

        Args:
            api_key: API key for authentication
            model: Model identifier
            base_url: Optional custom base URL for compatible APIs
            provider_name: Provider name for logging
            timeout: Per-call timeout in seconds
        """
        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._provider = provider_name
        self._timeout = timeout

        # Build litellm model name with proper prefix
        if provider_name == "openai" and not model.startswith("openai/"):
            self._litellm_model = f"openai/{model}"
        elif provider_name == "anthropic":
            if not model.startswith("anthropic/") and not model.startswith("claude"):
                self._litellm_model = f"anthropic/{model}"
            else:
                self._litellm_model = model
        elif provider_name in ("deepseek", "gemini", "ollama", "openrouter"):
            self._litellm_model = f"{provider_name}/{model}"
        else:
            self._litellm_model = model

        logger.info(
            "[LLM Gateway] Initialized: provider=%s, model=%s, litellm_model=%s, base_url=%s",
            provider_name,
            model,
            self._litellm_model,
            base_url,
        )

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def model(self) -> str:
        return self._model

    async def call(self, bundle: PromptBundle) -> LLMResponse:
        """Make LLM API call using LiteLLM.

        Args:
            bundle: Prompt bundle

        Returns:
            LLMResponse with raw content
        """
        start_time = time.time()

        kwargs = {
            "model": self._litellm_model,
            "messages": bundle.to_openai_format(),
            "temperature": bundle.temperature,
            "max_tokens": bundle.max_tokens,
            "api_key": self._api_key,
        }

        if self._base_url:
            kwargs["api_base"] = self._base_url

        if self._timeout:
            kwargs["timeout"] = self._timeout

        # Add response format if specified
        if bundle.response_format:
            kwargs["response_format"] = bundle.response_format

        response = await acompletion(**kwargs)

        latency_ms = int((time.time() - start_time) * 1000)
        logger.debug(
            "[LLM Gateway] Call complete: model=%s, latency=%dms",
            self._litellm_model,
            latency_ms,
        )

        return LLMResponse(
            content=response.choices[0].message.content or "",
            provider=self._provider,
            model=self._model,
            usage=TokenUsage(
                prompt_tokens=response.usage.prompt_tokens if response.usage else 0,
                completion_tokens=response.usage.completion_tokens if response.usage else 0,
                total_tokens=response.usage.total_tokens if response.usage else 0,
            ),
            latency_ms=latency_ms,
        )

    async def health_check(self) -> bool:
        """Check LLM API availability."""
        try:
            await acompletion(
                model=self._litellm_model,
                messages=[{"role": "user", "content": "Hi"}],
                max_tokens=5,
                api_key=self._api_key,
                **({"api_base": self._base_url} if self._base_url else {}),
            )
            return True
        except Exception as e:
            logger.warning("Health check failed for %s: %s", self._model, type(e).__name__)
            return False


class GatewayFactory:
    """Factory for creating LLM gateways."""

    # Default base URLs for OpenAI-compatible providers
    PROVIDER_BASE_URLS = {
        "openai": None,
        "anthropic": None,
        "deepseek": "https://api.deepseek.com/v1",
        "gemini": None,
        "ollama": None,
        "openrouter": None,
    }

    @classmethod
    def create(
        cls,
        provider: str,
        api_key: str,
        model: str,
        **kwargs,
    ) -> LLMGateway:
        """Create an LLM gateway for the specified provider.

        Args:
            provider: Provider name (openai, anthropic, deepseek, gemini, ...)
            api_key: API key for authentication
            model: Model identifier
            **kwargs: Additional arguments for the gateway (base_url, timeout)

        Returns:
            Configured LLMGateway instance
        """
        provider = provider.lower()
        base_url = cls.PROVIDER_BASE_URLS.get(provider)

        # Allow base_url override from kwargs
        if kwargs.get("base_url"):
            base_url = kwargs.pop("base_url")
        else:
            kwargs.pop("base_url", None)

        return LiteLLMGateway(
            api_key=api_key,
            model=model,
            base_url=base_url,
            provider_name=provider,
            **kwargs,
        )
