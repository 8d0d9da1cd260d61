"""Risk classification for unverified proper nouns.

The policy is a strategy object so the coarse length heuristic can be
replaced without touching the pipeline.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Sequence

from .models.result import RiskLevel


@dataclass(frozen=True)
class RiskAssessment:
    """Overall risk level plus human-readable warnings."""

    risk_level: RiskLevel = RiskLevel.GREEN
    warnings: List[str] = field(default_factory=list)


class RiskPolicy(ABC):
    """Abstract base class for risk policies."""

    @abstractmethod
    def classify(self, unverified: Sequence[str]) -> RiskAssessment:
        """Assess the unverified proper-noun candidates of one request.

        Args:
            unverified: Candidates reported by the proper-noun guard

        Returns:
            RiskAssessment for the whole request
        """
        pass


class NameLengthRiskPolicy(RiskPolicy):
    """Flag short Han-script runs as possible personal names.

    Japanese family and given names are typically 2-4 kanji, so any
    unverified candidate in that range makes the whole request RED. Longer
    candidates (places, organisations) only make it YELLOW.
    """

    NAME_WARNING = (
        "該当する固有名詞が、ナレッジベースに登録されていない状態です。: {terms}.\n\n"
        "ビザ申請の提出前に、パスポート記載の綴りに誤りがないかご確認ください。"
    )
    TERM_WARNING = (
        "Some proper nouns not found in knowledge base: {terms}. "
        "Please verify translations."
    )

    def __init__(self, min_name_length: int = 2, max_name_length: int = 4):
        if min_name_length > max_name_length:
            raise ValueError("min_name_length must not exceed max_name_length")
        self.min_name_length = min_name_length
        self.max_name_length = max_name_length

    def looks_like_name(self, candidate: str) -> bool:
        return self.min_name_length <= len(candidate) <= self.max_name_length

    def classify(self, unverified: Sequence[str]) -> RiskAssessment:
        if not unverified:
            return RiskAssessment()

        terms = ", ".join(unverified)
        if any(self.looks_like_name(candidate) for candidate in unverified):
            return RiskAssessment(
                risk_level=RiskLevel.RED,
                warnings=[self.NAME_WARNING.format(terms=terms)],
            )

        return RiskAssessment(
            risk_level=RiskLevel.YELLOW,
            warnings=[self.TERM_WARNING.format(terms=terms)],
        )


default_risk_policy = NameLengthRiskPolicy()


def classify(unverified: Sequence[str]) -> RiskAssessment:
    """Classify with the default name-length policy."""
    return default_risk_policy.classify(unverified)
