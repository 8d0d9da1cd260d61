"""Tests for proper-noun protection, restoration and detection."""

from visa_translator.core.glossary import Vocabulary
from visa_translator.core.translation.guard import (
    find_placeholders,
    find_unverified,
    protect,
    restore,
)


class TestProtect:
    """Glossary terms are replaced with placeholders before translation."""

    def test_known_term_is_replaced(self, vocabulary: Vocabulary) -> None:
        result = protect("私は田中太郎です。", vocabulary)

        assert "田中太郎" not in result.protected_text
        assert result.protected_text == "私は__PN_0__です。"
        assert result.placeholder_map == {"__PN_0__": "Taro Tanaka"}
        assert result.applied_terms == ["田中太郎"]

    def test_text_without_terms_is_unchanged(self, vocabulary: Vocabulary) -> None:
        result = protect("こんにちは。", vocabulary)

        assert result.protected_text == "こんにちは。"
        assert result.placeholder_map == {}
        assert result.applied_terms == []

    def test_empty_vocabulary_protects_nothing(self) -> None:
        result = protect("田中太郎です。", Vocabulary())

        assert result.protected_text == "田中太郎です。"
        assert result.applied_terms == []

    def test_repeated_term_shares_one_placeholder(self, vocabulary: Vocabulary) -> None:
        result = protect("田中太郎と田中太郎。", vocabulary)

        assert result.protected_text == "__PN_0__と__PN_0__。"
        assert result.applied_terms == ["田中太郎"]
        assert len(result.placeholder_map) == 1

    def test_longest_term_wins(self, vocabulary: Vocabulary) -> None:
        # 東京大学 and 東京 are both registered
        result = protect("東京大学を卒業し、東京に住んでいます。", vocabulary)

        assert "東京" not in result.protected_text
        assert result.applied_terms == ["東京大学", "東京"]
        assert result.placeholder_map == {
            "__PN_0__": "The University of Tokyo",
            "__PN_1__": "Tokyo",
        }

    def test_applied_terms_follow_text_order(self, vocabulary: Vocabulary) -> None:
        result = protect("山田花子と田中太郎。", vocabulary)

        assert result.applied_terms == ["山田花子", "田中太郎"]

    def test_existing_placeholder_is_not_reused(self, vocabulary: Vocabulary) -> None:
        result = protect("__PN_0__と田中太郎。", vocabulary)

        assert result.protected_text == "__PN_0__と__PN_1__。"
        assert result.placeholder_map == {"__PN_1__": "Taro Tanaka"}

    def test_oversized_placeholder_index_in_input(self, vocabulary: Vocabulary) -> None:
        existing = "__PN_" + "1" * 4301 + "__"

        result = protect(existing + " 田中太郎です。", vocabulary)

        assert result.protected_text == existing + " __PN_0__です。"
        assert result.placeholder_map == {"__PN_0__": "Taro Tanaka"}

    def test_first_category_rendering_wins(self) -> None:
        vocab = Vocabulary.from_mapping(
            {
                "places": {"青葉": {"en": "Aoba Ward"}},
                "person_names": {"青葉": {"en": "Aoba"}},
            },
            category_priority=["person_names", "places"],
        )

        results = {protect("青葉です。", vocab).placeholder_map["__PN_0__"] for _ in range(5)}

        assert results == {"Aoba"}


class TestRestore:
    """Placeholders are swapped back for verified renderings."""

    def test_restores_known_placeholders(self) -> None:
        text = "I am __PN_0__ from __PN_1__."
        mapping = {"__PN_0__": "Taro Tanaka", "__PN_1__": "Tokyo"}

        assert restore(text, mapping) == "I am Taro Tanaka from Tokyo."

    def test_unknown_placeholder_is_left_untouched(self) -> None:
        assert restore("__PN_7__ here", {"__PN_0__": "x"}) == "__PN_7__ here"

    def test_restore_is_idempotent(self) -> None:
        mapping = {"__PN_0__": "Taro Tanaka"}
        once = restore("Hello __PN_0__", mapping)

        assert restore(once, mapping) == once

    def test_rendering_is_not_rescanned(self) -> None:
        # A rendering that looks like a placeholder is inserted verbatim
        mapping = {"__PN_0__": "__PN_1__", "__PN_1__": "wrong"}

        assert restore("__PN_0__", mapping) == "__PN_1__"

    def test_protect_then_restore_leaves_no_placeholders(self, vocabulary: Vocabulary) -> None:
        protected = protect("田中太郎は大阪府に住んでいます。", vocabulary)
        restored = restore(protected.protected_text, protected.placeholder_map)

        assert find_placeholders(restored) == []
        assert "Taro Tanaka" in restored
        assert "Osaka Prefecture" in restored


class TestFindUnverified:
    """Han-script runs outside the glossary are reported."""

    def test_unknown_name_is_reported(self, vocabulary: Vocabulary) -> None:
        assert find_unverified("佐藤です。", vocabulary) == ["佐藤"]

    def test_known_terms_are_not_reported(self, vocabulary: Vocabulary) -> None:
        assert find_unverified("田中太郎は東京大学の学生です。", vocabulary) == ["学生"]

    def test_run_inside_known_term_is_not_reported(self, vocabulary: Vocabulary) -> None:
        assert find_unverified("田中", vocabulary) == []

    def test_run_containing_known_term_is_not_reported(self, vocabulary: Vocabulary) -> None:
        assert find_unverified("東京都", vocabulary) == []

    def test_single_kanji_is_ignored(self, vocabulary: Vocabulary) -> None:
        assert find_unverified("私は猫が好き", vocabulary) == []

    def test_duplicates_are_reported_once(self, vocabulary: Vocabulary) -> None:
        assert find_unverified("佐藤と佐藤と鈴木", vocabulary) == ["佐藤", "鈴木"]

    def test_empty_vocabulary_reports_every_run(self) -> None:
        assert find_unverified("田中太郎は学生", Vocabulary()) == ["田中太郎", "学生"]
