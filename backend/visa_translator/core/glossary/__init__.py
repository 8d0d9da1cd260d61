"""Glossary (proper-noun knowledge base) package."""

from .models import Vocabulary, VocabularyEntry
from .store import (
    JsonFileVocabularyLoader,
    VocabularyLoader,
    VocabularyStore,
    get_vocabulary_store,
)

__all__ = [
    "Vocabulary",
    "VocabularyEntry",
    "VocabularyLoader",
    "JsonFileVocabularyLoader",
    "VocabularyStore",
    "get_vocabulary_store",
]
