"""Prompt strategies for translation modes."""

from .base import PromptStrategy
from .visa_strict import VisaStrictStrategy

# Supported request modes
STRATEGIES = {
    VisaStrictStrategy.mode: VisaStrictStrategy,
}

__all__ = [
    "PromptStrategy",
    "VisaStrictStrategy",
    "STRATEGIES",
]
