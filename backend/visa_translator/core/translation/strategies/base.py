"""Base prompt strategy.

This module defines the abstract base class for all translation prompt strategies.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from ..models.prompt import PromptBundle


class PromptStrategy(ABC):
    """Abstract base class for translation prompt strategies.

    Each strategy encapsulates the logic for building prompts for a specific
    translation mode. Strategies are responsible for:
    1. Building the system prompt with appropriate instructions
    2. Building the user prompt with the single sentence to translate
    3. Setting appropriate model parameters (temperature, max_tokens)
    """

    #: Request ``mode`` value served by this strategy
    mode: str = ""

    @abstractmethod
    def build(self, sentence: str) -> PromptBundle:
        """Build prompt bundle for one protected sentence.

        Args:
            sentence: Sentence with proper nouns already replaced by placeholders

        Returns:
            PromptBundle ready for LLM call
        """
        pass

    @abstractmethod
    def get_template_variables(self, sentence: str) -> Dict[str, Any]:
        """Extract template variables.

        Args:
            sentence: Sentence to translate

        Returns:
            Dictionary of variable names to values used in prompts
        """
        pass
