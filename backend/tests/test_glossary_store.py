"""Tests for glossary models, loading and caching."""

import json
from pathlib import Path

import pytest

from visa_translator.core.errors import VocabularyLoadError
from visa_translator.core.glossary import (
    JsonFileVocabularyLoader,
    Vocabulary,
    VocabularyStore,
)

from .conftest import CATEGORY_PRIORITY, SAMPLE_GLOSSARY


class TestVocabulary:
    def test_from_mapping_reads_renderings(self, vocabulary: Vocabulary) -> None:
        entry = vocabulary.resolve("田中太郎")

        assert entry is not None
        assert entry.target_rendering == "Taro Tanaka"
        assert entry.confidence == "verified"

    def test_counts(self, vocabulary: Vocabulary) -> None:
        assert len(vocabulary) == 5
        assert vocabulary.category_counts() == {
            "person_names": 2,
            "organizations": 1,
            "places": 2,
        }

    def test_unknown_term_resolves_to_none(self, vocabulary: Vocabulary) -> None:
        assert vocabulary.resolve("佐藤") is None

    def test_priority_categories_come_first(self) -> None:
        vocab = Vocabulary.from_mapping(
            {"extra": {}, "places": {}, "person_names": {}},
            category_priority=["person_names", "places"],
        )

        assert list(vocab.categories) == ["person_names", "places", "extra"]

    def test_malformed_entries_are_skipped(self) -> None:
        vocab = Vocabulary.from_mapping(
            {
                "person_names": {
                    "田中太郎": {"en": "Taro Tanaka"},
                    "山田": "not an object",
                    "佐藤": {"en": ""},
                    "鈴木": {"confidence": "verified"},
                },
                "broken": ["not", "a", "mapping"],
            }
        )

        assert vocab.known_terms() == {"田中太郎"}
        assert "broken" not in vocab.categories

    def test_empty_vocabulary(self) -> None:
        assert Vocabulary().is_empty()


class TestJsonFileVocabularyLoader:
    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "glossary.json"
        path.write_text(json.dumps(SAMPLE_GLOSSARY, ensure_ascii=False), encoding="utf-8")

        vocab = JsonFileVocabularyLoader(path, CATEGORY_PRIORITY)()

        assert vocab.resolve("東京").target_rendering == "Tokyo"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(VocabularyLoadError):
            JsonFileVocabularyLoader(tmp_path / "missing.json")()

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "glossary.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(VocabularyLoadError):
            JsonFileVocabularyLoader(path)()

    def test_non_object_root(self, tmp_path: Path) -> None:
        path = tmp_path / "glossary.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(VocabularyLoadError):
            JsonFileVocabularyLoader(path)()

    def test_bundled_glossary_loads(self) -> None:
        path = Path(__file__).parent.parent.parent / "data" / "glossary.json"

        vocab = JsonFileVocabularyLoader(path, CATEGORY_PRIORITY)()

        assert vocab.resolve("田中太郎").target_rendering == "Taro Tanaka"


class TestVocabularyStore:
    def test_loads_lazily_once(self, vocabulary: Vocabulary) -> None:
        calls = []

        def loader() -> Vocabulary:
            calls.append(1)
            return vocabulary

        store = VocabularyStore(loader)
        assert not store.is_loaded

        store.load()
        store.load()

        assert store.is_loaded
        assert len(calls) == 1

    def test_reload_reads_again(self, vocabulary: Vocabulary) -> None:
        results = [Vocabulary(), vocabulary]
        store = VocabularyStore(lambda: results.pop(0))

        assert store.load().is_empty()
        assert len(store.reload()) == 5

    def test_load_failure_degrades_to_empty(self) -> None:
        def loader() -> Vocabulary:
            raise VocabularyLoadError("Glossary file not found")

        store = VocabularyStore(loader)

        assert store.load().is_empty()
        assert store.is_loaded
