"""Tests for prompt templates and the visa-strict strategy."""

import pytest

from visa_translator.core.prompts.loader import PromptLoader
from visa_translator.core.translation.strategies import STRATEGIES, VisaStrictStrategy


class TestPromptLoader:
    def test_render_variables(self) -> None:
        assert PromptLoader.render("Hello {{name}}!", {"name": "Taro"}) == "Hello Taro!"

    def test_render_fallback(self) -> None:
        template = '{{lang | default:"Japanese"}} / {{other | default:"x"}}'

        assert PromptLoader.render(template, {"lang": "English"}) == "English / x"

    def test_render_nested_variable(self) -> None:
        assert PromptLoader.render("{{a.b}}", {"a": {"b": "ok"}}) == "ok"

    def test_missing_variable_renders_empty(self) -> None:
        assert PromptLoader.render("[{{missing}}]", {}) == "[]"

    def test_values_are_not_rerendered(self) -> None:
        result = PromptLoader.render("{{source_text}}", {"source_text": "{{mode}}", "mode": "x"})

        assert result == "{{mode}}"

    def test_extract_variables(self) -> None:
        template = '{{a}} {{b | default:"x"}} {{a}}'

        assert sorted(PromptLoader.extract_variables(template)) == ["a", "b"]

    def test_visa_strict_template_loads(self) -> None:
        template = PromptLoader.load_template("translation", "visa-strict")

        assert "__PN_0__" in template.system_prompt
        assert "source_text" in template.variables
        assert "visa-strict" in PromptLoader.list_available_templates("translation")

    def test_invalid_prompt_type(self) -> None:
        with pytest.raises(ValueError):
            PromptLoader.load_template("discussion")

    def test_missing_template(self) -> None:
        with pytest.raises(FileNotFoundError):
            PromptLoader.load_template("translation", "does-not-exist")


class TestVisaStrictStrategy:
    def test_build(self) -> None:
        bundle = VisaStrictStrategy(temperature=0.2, max_tokens=256).build("私は__PN_0__です。")

        assert bundle.system_prompt is not None
        assert "Japanese" in bundle.system_prompt
        assert '"私は__PN_0__です。"' in bundle.user_prompt
        assert "{{" not in bundle.user_prompt
        assert bundle.temperature == 0.2
        assert bundle.max_tokens == 256
        assert bundle.response_format == {"type": "json_object"}

    def test_fallback_prompts_when_files_missing(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setattr(PromptLoader, "PROMPTS_DIR", tmp_path)

        bundle = VisaStrictStrategy().build("こんにちは。")

        assert "__PN_0__" in bundle.system_prompt
        assert "こんにちは。" in bundle.user_prompt

    def test_only_visa_strict_is_registered(self) -> None:
        assert list(STRATEGIES) == ["visa-strict"]
