"""Shared fixtures for the translation service tests.

No test talks to a real provider: the LLM gateway and the sentence
translator are replaced by scripted fakes, and the glossary is loaded from
an in-memory mapping.
"""

import json
from typing import Callable, Dict, List, Optional, Union

import pytest

from visa_translator.core.glossary import Vocabulary, VocabularyStore
from visa_translator.core.translation.models import (
    LLMResponse,
    PromptBundle,
    SentenceOutcome,
    TokenUsage,
)
from visa_translator.core.translation.pipeline import (
    LLMGateway,
    TranslationPipeline,
)

SAMPLE_GLOSSARY = {
    "person_names": {
        "田中太郎": {"en": "Taro Tanaka", "confidence": "verified"},
        "山田花子": {"en": "Hanako Yamada", "confidence": "verified"},
    },
    "organizations": {
        "東京大学": {"en": "The University of Tokyo", "confidence": "verified"},
    },
    "places": {
        "東京": {"en": "Tokyo", "confidence": "verified"},
        "大阪府": {"en": "Osaka Prefecture", "confidence": "verified"},
    },
}

CATEGORY_PRIORITY = ["person_names", "organizations", "places"]


class FakeGateway(LLMGateway):
    """Gateway that replays scripted responses.

    Each script item is either response content or an exception to raise.
    """

    def __init__(
        self,
        script: Optional[List[Union[str, Exception]]] = None,
        healthy: bool = True,
    ):
        self.script = list(script or [])
        self.healthy = healthy
        self.bundles: List[PromptBundle] = []

    @property
    def provider(self) -> str:
        return "fake"

    @property
    def model(self) -> str:
        return "fake-model"

    async def call(self, bundle: PromptBundle) -> LLMResponse:
        self.bundles.append(bundle)
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return LLMResponse(
            content=item,
            provider=self.provider,
            model=self.model,
            usage=TokenUsage(prompt_tokens=10, completion_tokens=5),
            latency_ms=42,
        )

    async def health_check(self) -> bool:
        return self.healthy


class FakeTranslator:
    """Sentence translator backed by a lookup table.

    Sentences missing from the table are echoed as ``EN(<sentence>)``.
    Sentences listed in ``failing`` come back as failed outcomes.
    """

    def __init__(
        self,
        table: Optional[Dict[str, str]] = None,
        failing: tuple = (),
        healthy: bool = True,
    ):
        self.table = table or {}
        self.failing = set(failing)
        self.healthy = healthy
        self.calls: List[str] = []

    async def translate(self, sentence: str) -> SentenceOutcome:
        self.calls.append(sentence)
        if sentence in self.failing:
            return SentenceOutcome.failed("provider_error")
        return SentenceOutcome.ok(self.table.get(sentence, f"EN({sentence})"))

    async def health_check(self) -> bool:
        return self.healthy


def json_reply(translated: str) -> str:
    return json.dumps({"translated": translated}, ensure_ascii=False)


@pytest.fixture
def vocabulary() -> Vocabulary:
    return Vocabulary.from_mapping(SAMPLE_GLOSSARY, CATEGORY_PRIORITY)


@pytest.fixture
def vocabulary_store(vocabulary: Vocabulary) -> VocabularyStore:
    return VocabularyStore(lambda: vocabulary)


@pytest.fixture
def make_pipeline(
    vocabulary_store: VocabularyStore,
) -> Callable[..., TranslationPipeline]:
    """Build a pipeline around a fake translator."""

    def _make(translator=None, store: Optional[VocabularyStore] = None, **kwargs):
        return TranslationPipeline(
            translator=translator or FakeTranslator(),
            vocabulary_store=store or vocabulary_store,
            **kwargs,
        )

    return _make
