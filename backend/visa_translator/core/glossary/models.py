"""Glossary data models.

The glossary is the trusted knowledge base of proper nouns (person names,
clinics, schools, places) with verified English renderings. On disk it is
organised as ``category -> japanese term -> {"en": ..., "confidence": ...}``.
"""

import logging
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class VocabularyEntry(BaseModel):
    """A single verified term."""

    model_config = ConfigDict(frozen=True)

    source_term: str = Field(..., min_length=1, description="Japanese term")
    target_rendering: str = Field(
        ..., min_length=1, description="Verified English rendering"
    )
    confidence: str = Field(default="unverified", description="Confidence label")


class Vocabulary(BaseModel):
    """Ordered category -> term -> entry mapping.

    Category order is significant: when the same term is registered in more
    than one category, the first category wins.
    """

    model_config = ConfigDict(frozen=True)

    categories: Dict[str, Dict[str, VocabularyEntry]] = Field(default_factory=dict)

    def __len__(self) -> int:
        return sum(len(entries) for entries in self.categories.values())

    def is_empty(self) -> bool:
        return len(self) == 0

    def terms(self) -> Iterator[Tuple[str, VocabularyEntry]]:
        """Yield (category, entry) pairs in priority order."""
        for category, entries in self.categories.items():
            for entry in entries.values():
                yield category, entry

    def known_terms(self) -> set[str]:
        return {entry.source_term for _, entry in self.terms()}

    def resolve(self, term: str) -> Optional[VocabularyEntry]:
        """Return the entry for a term from the first category that has it."""
        for entries in self.categories.values():
            entry = entries.get(term)
            if entry is not None:
                return entry
        return None

    def category_counts(self) -> Dict[str, int]:
        return {category: len(entries) for category, entries in self.categories.items()}

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any],
        category_priority: Sequence[str] = (),
    ) -> "Vocabulary":
        """Build a vocabulary from the on-disk JSON structure.

        Categories listed in ``category_priority`` come first, in that order;
        the remaining categories keep their file order. Malformed categories
        and entries are skipped with a warning.

        Args:
            raw: Parsed glossary JSON
            category_priority: Category names that take precedence

        Returns:
            Vocabulary with deterministic category order
        """
        ordered = [name for name in category_priority if name in raw]
        ordered += [name for name in raw if name not in ordered]

        categories: Dict[str, Dict[str, VocabularyEntry]] = {}
        for category in ordered:
            entries = raw[category]
            if not isinstance(entries, Mapping):
                logger.warning("Skipping glossary category '%s': not an object", category)
                continue

            parsed: Dict[str, VocabularyEntry] = {}
            skipped = 0
            for term, value in entries.items():
                entry = _parse_entry(term, value)
                if entry is None:
                    skipped += 1
                    continue
                parsed[term] = entry

            if skipped:
                logger.warning(
                    "Skipped %d malformed entries in glossary category '%s'",
                    skipped,
                    category,
                )
            categories[category] = parsed

        return cls(categories=categories)


def _parse_entry(term: str, value: Any) -> Optional[VocabularyEntry]:
    if not isinstance(value, Mapping):
        return None
    rendering = value.get("en", value.get("target_rendering"))
    try:
        return VocabularyEntry(
            source_term=term,
            target_rendering=rendering,
            confidence=value.get("confidence", "unverified"),
        )
    except ValidationError:
        return None
