"""Output processor for sentence translations.

This module turns raw LLM responses into the translated sentence text and
checks that the placeholder contract was honoured.
"""

import json
import re
from collections import Counter
from typing import Any

from visa_translator.core.errors import TranslationCapabilityError

from ..guard import find_placeholders
from ..models.response import LLMResponse


class OutputProcessor:
    """Processes raw LLM responses into translated sentences.

    Responsibilities:
    1. Extract the ``translated`` field from the JSON response
    2. Verify that placeholders came back byte-identical
    3. Apply light post-processing
    """

    # First JSON object in a response that wraps it in prose
    JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

    def process(self, response: LLMResponse, source: str) -> str:
        """Process raw LLM response into the translated sentence.

        Args:
            response: Raw response from LLM
            source: Protected sentence that was sent

        Returns:
            Translated sentence

        Raises:
            TranslationCapabilityError: If the response is malformed or the
                placeholders were altered
        """
        translated = self._extract_translation(response.content)
        self._verify_placeholders(source, translated)
        return self._post_process(translated)

    def _extract_translation(self, content: str) -> str:
        """Extract translation text from response content.

        Handles:
        - Plain JSON object
        - JSON inside markdown code blocks
        - JSON surrounded by prose

        Args:
            content: Raw response content

        Returns:
            The ``translated`` value
        """
        content = content.strip()
        if not content:
            raise TranslationCapabilityError("Empty response", kind="empty_response")

        # Try to extract from markdown code blocks
        if content.startswith("```"):
            lines = content.split("\n")
            if len(lines) >= 3:
                content = "\n".join(lines[1:-1]).strip()

        payload = self._parse_json(content)
        if payload is None:
            match = self.JSON_OBJECT_PATTERN.search(content)
            if match:
                payload = self._parse_json(match.group(0))

        if not isinstance(payload, dict):
            raise TranslationCapabilityError(
                "Response is not a JSON object", kind="malformed_response"
            )

        translated = payload.get("translated")
        if not isinstance(translated, str) or not translated.strip():
            raise TranslationCapabilityError(
                "Response has no 'translated' text", kind="malformed_response"
            )

        return translated

    def _parse_json(self, content: str) -> Any:
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            return None

    def _verify_placeholders(self, source: str, translated: str) -> None:
        """Every source placeholder occurrence must survive; none may be invented."""
        expected = Counter(find_placeholders(source))
        returned = Counter(find_placeholders(translated))

        lost = expected - returned
        if lost:
            raise TranslationCapabilityError(
                f"{sum(lost.values())} placeholder(s) dropped by the model",
                kind="placeholder_lost",
            )
        invented = returned - expected
        if invented:
            raise TranslationCapabilityError(
                f"{sum(invented.values())} unexpected placeholder(s) in the response",
                kind="placeholder_invented",
            )

    def _post_process(self, text: str) -> str:
        # Normalize excessive newlines (3+ -> 2)
        text = re.sub(r"\n{3,}", "\n\n", text)
        return text.strip()
