"""Prompt template loader and renderer.

This module handles loading prompt templates from .md files and rendering
them with variable substitution.

Supports:
- Named templates: system.{template_name}.md (e.g., system.visa-strict.md)
- Simple variables: {{var}} or {{namespace.var}}
- Fallback values: {{var | default:"value"}}
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class PromptTemplate(BaseModel):
    """Prompt template model."""

    type: str
    system_prompt: str
    user_prompt_template: str
    variables: list[str]
    last_modified: datetime
    template_name: str = "visa-strict"


class PromptLoader:
    """Load and render prompt templates from .md files."""

    # Base directory for prompt templates (backend/prompts)
    PROMPTS_DIR = Path(__file__).parent.parent.parent.parent / "prompts"

    # Valid prompt types
    VALID_TYPES = ["translation"]

    DEFAULT_TEMPLATE = "visa-strict"

    # Variable pattern: {{variable_name}}
    VARIABLE_PATTERN = re.compile(r"\{\{(\w+(?:\.\w+)*)\}\}")

    # Fallback pattern: {{var | default:"value"}} or {{var | default:'value'}}
    FALLBACK_PATTERN = re.compile(
        r"\{\{(\w+(?:\.\w+)*)\s*\|\s*default:\s*[\"']([^\"']*)[\"']\}\}"
    )

    # Both forms in one pass
    TOKEN_PATTERN = re.compile(f"{FALLBACK_PATTERN.pattern}|{VARIABLE_PATTERN.pattern}")

    @classmethod
    def get_prompt_path(
        cls,
        prompt_type: str,
        filename: str,
        template_name: str = DEFAULT_TEMPLATE,
    ) -> Path:
        """Get the path to a prompt file.

        Args:
            prompt_type: Type of prompt (translation)
            filename: Base name of the file (system or user)
            template_name: Name of the template (visa-strict, ...)

        Returns:
            Path to the prompt file
        """
        return cls.PROMPTS_DIR / prompt_type / f"{filename}.{template_name}.md"

    @classmethod
    def list_available_templates(cls, prompt_type: str) -> list[str]:
        """List available template names for a prompt type."""
        if prompt_type not in cls.VALID_TYPES:
            return []

        prompt_dir = cls.PROMPTS_DIR / prompt_type
        if not prompt_dir.exists():
            return []

        return sorted(
            f.name[len("system."):-len(".md")] for f in prompt_dir.glob("system.*.md")
        )

    @classmethod
    def load_template(
        cls,
        prompt_type: str,
        template_name: str = DEFAULT_TEMPLATE,
    ) -> PromptTemplate:
        """Load a prompt template from files.

        Args:
            prompt_type: Type of prompt to load
            template_name: Template name

        Returns:
            PromptTemplate with system and user prompts

        Raises:
            ValueError: If prompt type is invalid
            FileNotFoundError: If prompt files don't exist
        """
        if prompt_type not in cls.VALID_TYPES:
            raise ValueError(
                f"Invalid prompt type: {prompt_type}. Valid types: {cls.VALID_TYPES}"
            )

        system_path = cls.get_prompt_path(prompt_type, "system", template_name)
        user_path = cls.get_prompt_path(prompt_type, "user", template_name)
        for path in (system_path, user_path):
            if not path.exists():
                raise FileNotFoundError(f"Prompt not found: {path}")

        system_prompt = system_path.read_text(encoding="utf-8")
        user_prompt = user_path.read_text(encoding="utf-8")

        last_modified = max(
            datetime.fromtimestamp(system_path.stat().st_mtime),
            datetime.fromtimestamp(user_path.stat().st_mtime),
        )

        return PromptTemplate(
            type=prompt_type,
            system_prompt=system_prompt,
            user_prompt_template=user_prompt,
            variables=cls.extract_variables(system_prompt + user_prompt),
            last_modified=last_modified,
            template_name=template_name,
        )

    @classmethod
    def extract_variables(cls, template: str) -> list[str]:
        """Extract variable names used in a template, in order of first use."""
        names: list[str] = []
        for match in cls.FALLBACK_PATTERN.finditer(template):
            if match.group(1) not in names:
                names.append(match.group(1))
        for match in cls.VARIABLE_PATTERN.finditer(template):
            if match.group(1) not in names:
                names.append(match.group(1))
        return names

    @classmethod
    def render(cls, template: str, variables: dict[str, Any]) -> str:
        """Render a template with variables.

        Each pass is a single substitution, so values are inserted verbatim
        and never re-rendered.

        Args:
            template: Template string
            variables: Dictionary of variable values

        Returns:
            Rendered template string
        """

        def replace_token(match: re.Match[str]) -> str:
            # Groups 1-2: fallback form, group 3: plain variable
            if match.group(1) is not None:
                value = cls._get_nested_value(variables, match.group(1))
                if value is None or value == "":
                    return match.group(2)
                return str(value)

            value = cls._get_nested_value(variables, match.group(3))
            if value is None:
                logger.debug("Template variable not provided: %s", match.group(3))
                return ""
            return str(value)

        return cls.TOKEN_PATTERN.sub(replace_token, template).strip()

    @classmethod
    def _get_nested_value(cls, data: dict, key: str) -> Optional[Any]:
        """Look up ``a.b.c`` style keys, preferring an exact flat key."""
        if key in data:
            return data[key]

        current: Any = data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current
