"""Proper-noun protection and restoration.

Known glossary terms are swapped for opaque ``__PN_<n>__`` placeholders
before the text reaches the model, so the model cannot guess a reading for
a name. After translation the placeholders are replaced with the verified
English renderings.

Han-script runs that are not in the glossary are reported separately so the
risk classifier can warn the user.
"""

import itertools
import re
from dataclasses import dataclass, field
from typing import Dict, List

from visa_translator.core.glossary import Vocabulary

PLACEHOLDER_PATTERN = re.compile(r"__PN_(\d+)__")

# Runs of CJK unified ideographs; a coarse proxy for names and places.
HAN_RUN_PATTERN = re.compile(r"[\u4e00-\u9faf]{2,}")


def make_placeholder(index: int) -> str:
    return f"__PN_{index}__"


def find_placeholders(text: str) -> List[str]:
    """Return every placeholder-shaped token in text, in order."""
    return [match.group(0) for match in PLACEHOLDER_PATTERN.finditer(text)]


@dataclass(frozen=True)
class ProtectedText:
    """Text with glossary terms replaced by placeholders.

    Attributes:
        protected_text: Text safe to send to the model
        placeholder_map: Placeholder -> verified rendering, in minting order
        applied_terms: Source terms substituted, in order of first appearance
    """

    protected_text: str
    placeholder_map: Dict[str, str] = field(default_factory=dict)
    applied_terms: List[str] = field(default_factory=list)


def _candidate_terms(vocab: Vocabulary) -> List[str]:
    """Unique terms, longest first; equal lengths keep vocabulary order."""
    seen: Dict[str, None] = {}
    for _, entry in vocab.terms():
        seen.setdefault(entry.source_term, None)
    return sorted(seen, key=len, reverse=True)


def protect(text: str, vocab: Vocabulary) -> ProtectedText:
    """Replace glossary terms in text with placeholders.

    Matching is a single left-to-right pass over the text: at each position
    the longest registered term wins and matches never overlap. Every
    occurrence of a term shares one placeholder. When a term is registered
    in several categories the first category's rendering is used.

    Args:
        text: Raw applicant text
        vocab: Glossary to protect

    Returns:
        ProtectedText with the placeholder map and applied terms
    """
    terms = _candidate_terms(vocab)
    if not text or not terms:
        return ProtectedText(protected_text=text)

    # Placeholder-shaped tokens already in the input are never minted again
    taken = set(find_placeholders(text))
    indexes = (n for n in itertools.count() if make_placeholder(n) not in taken)

    pattern = re.compile("|".join(re.escape(term) for term in terms))
    placeholders: Dict[str, str] = {}
    placeholder_map: Dict[str, str] = {}
    applied_terms: List[str] = []

    def substitute(match: re.Match[str]) -> str:
        term = match.group(0)
        placeholder = placeholders.get(term)
        if placeholder is None:
            placeholder = make_placeholder(next(indexes))
            placeholders[term] = placeholder
            placeholder_map[placeholder] = vocab.resolve(term).target_rendering
            applied_terms.append(term)
        return placeholder

    protected_text = pattern.sub(substitute, text)

    return ProtectedText(
        protected_text=protected_text,
        placeholder_map=placeholder_map,
        applied_terms=applied_terms,
    )


def find_unverified(text: str, vocab: Vocabulary) -> List[str]:
    """Find Han-script runs that the glossary cannot vouch for.

    A run is dropped when it equals a known term, is part of a known term,
    or contains a known term. The rest are candidate proper nouns: not
    guaranteed to be names, but treated as such for risk purposes.

    Args:
        text: Raw applicant text
        vocab: Glossary of known terms

    Returns:
        Unverified runs in order of first appearance, without duplicates
    """
    known = vocab.known_terms()
    unverified: List[str] = []

    for run in HAN_RUN_PATTERN.findall(text):
        if run in unverified or run in known:
            continue
        if any(run in term or term in run for term in known):
            continue
        unverified.append(run)

    return unverified


def restore(text: str, placeholder_map: Dict[str, str]) -> str:
    """Replace placeholders with their verified renderings.

    Placeholder-shaped tokens that are not in the map are left untouched.
    Restoring twice gives the same result as restoring once.
    """
    if not placeholder_map:
        return text

    def substitute(match: re.Match[str]) -> str:
        return placeholder_map.get(match.group(0), match.group(0))

    return PLACEHOLDER_PATTERN.sub(substitute, text)
