"""Glossary loading and process-wide caching.

The store owns the cached vocabulary. It is loaded lazily on first use and
then shared read-only by every request until ``reload()`` is called.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Callable, Optional, Sequence

from visa_translator.config import settings
from visa_translator.core.errors import VocabularyLoadError

from .models import Vocabulary

logger = logging.getLogger(__name__)

VocabularyLoader = Callable[[], Vocabulary]


class JsonFileVocabularyLoader:
    """Load the glossary from a JSON file."""

    def __init__(self, path: Path, category_priority: Sequence[str] = ()):
        self.path = Path(path)
        self.category_priority = list(category_priority)

    def __call__(self) -> Vocabulary:
        """Read and parse the glossary file.

        Raises:
            VocabularyLoadError: If the file is missing, unreadable, or not
                a JSON object
        """
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise VocabularyLoadError(f"Glossary file not found: {self.path}") from e
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise VocabularyLoadError(
                f"Glossary file could not be read: {type(e).__name__}"
            ) from e

        if not isinstance(raw, dict):
            raise VocabularyLoadError("Glossary root must be a JSON object")

        return Vocabulary.from_mapping(raw, self.category_priority)


class VocabularyStore:
    """Lazily-initialized, explicitly owned vocabulary cache.

    A failed load degrades to an empty vocabulary instead of failing the
    request: nothing gets protected and every Han-script run is flagged.
    """

    def __init__(self, loader: VocabularyLoader):
        self._loader = loader
        self._vocabulary: Optional[Vocabulary] = None

    @property
    def is_loaded(self) -> bool:
        return self._vocabulary is not None

    def load(self) -> Vocabulary:
        """Return the cached vocabulary, loading it on first use."""
        if self._vocabulary is None:
            self._vocabulary = self._load_safely()
        return self._vocabulary

    def reload(self) -> Vocabulary:
        """Drop the cache and load the vocabulary again."""
        self._vocabulary = None
        return self.load()

    def _load_safely(self) -> Vocabulary:
        try:
            vocabulary = self._loader()
        except VocabularyLoadError as e:
            logger.error("Failed to load glossary (%s). Using empty glossary.", e)
            return Vocabulary()

        logger.info(
            "Loaded glossary: %d terms in %d categories",
            len(vocabulary),
            len(vocabulary.categories),
        )
        return vocabulary


@lru_cache(maxsize=None)
def get_vocabulary_store() -> VocabularyStore:
    """Get the process-wide vocabulary store built from settings."""
    return VocabularyStore(
        JsonFileVocabularyLoader(
            settings.glossary_path,
            category_priority=settings.glossary_category_priority,
        )
    )
