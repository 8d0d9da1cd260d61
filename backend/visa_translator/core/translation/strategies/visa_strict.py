"""Visa-strict translation strategy.

Literal, sentence-locked translation for US visa forms (DS-160/ESTA).
"""

import logging
from typing import Any, Dict, Optional

from .base import PromptStrategy
from ..models.prompt import Message, PromptBundle
from visa_translator.core.prompts.loader import PromptLoader

logger = logging.getLogger(__name__)


class VisaStrictStrategy(PromptStrategy):
    """Literal translation of one sentence with placeholder preservation.

    Prompts are loaded from:
    - backend/prompts/translation/system.visa-strict.md
    - backend/prompts/translation/user.visa-strict.md
    """

    mode = "visa-strict"

    # Language name mapping
    LANGUAGE_NAMES = {
        "ja": "Japanese",
        "en": "English",
    }

    def __init__(
        self,
        source_language: str = "ja",
        target_language: str = "en",
        temperature: float = 0.1,
        max_tokens: int = 1024,
    ):
        self.source_language = source_language
        self.target_language = target_language
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._template_cache: Optional[tuple[str, str]] = None

    def build(self, sentence: str) -> PromptBundle:
        """Build prompt bundle for visa-strict translation.

        Args:
            sentence: Protected sentence

        Returns:
            PromptBundle with system and user messages, JSON response format
        """
        variables = self.get_template_variables(sentence)
        system_template, user_template = self._load_templates()

        system_prompt = PromptLoader.render(system_template, variables)
        user_prompt = PromptLoader.render(user_template, variables)

        return PromptBundle(
            messages=[
                Message(role="system", content=system_prompt),
                Message(role="user", content=user_prompt),
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            response_format={"type": "json_object"},
            mode=self.mode,
        )

    def get_template_variables(self, sentence: str) -> Dict[str, Any]:
        return {
            "source_text": sentence,
            "mode": self.mode,
            "source_language_name": self.LANGUAGE_NAMES.get(
                self.source_language, self.source_language
            ),
            "target_language_name": self.LANGUAGE_NAMES.get(
                self.target_language, self.target_language
            ),
        }

    def _load_templates(self) -> tuple[str, str]:
        """Load templates once per strategy; fall back to built-in prompts."""
        if self._template_cache is None:
            try:
                template = PromptLoader.load_template("translation", self.mode)
                self._template_cache = (
                    template.system_prompt,
                    template.user_prompt_template,
                )
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load prompts from files: {e}. Using fallback.")
                self._template_cache = (FALLBACK_SYSTEM_PROMPT, FALLBACK_USER_PROMPT)
        return self._template_cache


FALLBACK_SYSTEM_PROMPT = """You are a translation assistant for US visa applications (DS-160/ESTA).

CRITICAL ACCURACY RULES:
1. Translate literally and accurately. Do not infer, adapt, embellish, or paraphrase.
2. Do not omit or add details, numbers, dates, or names.
3. Translate only the single sentence you are given.

CRITICAL: Do NOT modify any placeholders that look like __PN_0__, __PN_1__, etc.
They must remain EXACTLY as they appear.

Return ONLY a JSON object: {"translated": "English translation here"}"""

FALLBACK_USER_PROMPT = """Translate this {{source_language_name}} text for a US visa application form ({{mode}} mode):

"{{source_text}}"

Preserve all placeholders (__PN_X__) exactly. Return the JSON object only."""
