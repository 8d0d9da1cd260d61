"""Translation result models.

This module defines the final output data structures from the translation
pipeline: the per-sentence breakdown, the risk level, and the assembled
result returned to the form.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RiskLevel(str, Enum):
    """Confidence that every proper noun in the output is verified.

    Ordered by severity: GREEN < YELLOW < RED.
    """

    GREEN = "GREEN"  # every Han-script run is a registered term
    YELLOW = "YELLOW"  # unregistered place / organisation-shaped terms
    RED = "RED"  # unregistered name-shaped terms

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def __lt__(self, other: "RiskLevel") -> bool:
        return self.severity < RiskLevel(other).severity

    def __le__(self, other: "RiskLevel") -> bool:
        return self.severity <= RiskLevel(other).severity

    def __gt__(self, other: "RiskLevel") -> bool:
        return self.severity > RiskLevel(other).severity

    def __ge__(self, other: "RiskLevel") -> bool:
        return self.severity >= RiskLevel(other).severity


_SEVERITY = {RiskLevel.GREEN: 0, RiskLevel.YELLOW: 1, RiskLevel.RED: 2}


class Sentence(BaseModel):
    """One source sentence and its restored translation."""

    model_config = ConfigDict(frozen=True)

    original: str
    translated: str


class SentenceOutcome(BaseModel):
    """Result of translating one protected sentence.

    Failure is explicit so the pipeline decides the fallback.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Translated sentence, empty on failure")
    success: bool = True
    error_kind: Optional[str] = Field(
        default=None, description="Failure kind for logs (never content)"
    )

    @classmethod
    def ok(cls, text: str) -> "SentenceOutcome":
        return cls(text=text)

    @classmethod
    def failed(cls, error_kind: str) -> "SentenceOutcome":
        return cls(text="", success=False, error_kind=error_kind)


class TranslationResult(BaseModel):
    """Final processed translation output.

    This is the output contract of the translation pipeline and the body of
    a successful ``POST /translate`` response (camelCase on the wire).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    output_text: str = Field(..., description="Restored, joined translation")
    risk_level: RiskLevel = Field(default=RiskLevel.GREEN)
    warnings: List[str] = Field(default_factory=list)
    applied_glossary: List[str] = Field(
        default_factory=list,
        description="Glossary terms substituted, in order of first appearance",
    )
    sentences: List[Sentence] = Field(default_factory=list)

    def needs_human_review(self) -> bool:
        """Check if the translation should be re-verified before submission."""
        return self.risk_level != RiskLevel.GREEN
