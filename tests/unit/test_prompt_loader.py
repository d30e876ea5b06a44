"""Tests for prompt template loading."""

from pathlib import Path

import pytest

from promoposter.generation.exceptions import PromptTemplateError
from promoposter.generation.prompt_loader import load_prompt_template


class TestLoadPromptTemplate:
    def test_loads_summary_template(self) -> None:
        template = load_prompt_template("summary_prompt.txt")
        assert "{directive}" in template
        assert "{text}" in template

    def test_loads_image_prompt_templates(self) -> None:
        assert "{max_chars}" in load_prompt_template("image_prompt_system.txt")
        assert "{summary}" in load_prompt_template("image_prompt_user.txt")

    def test_loads_copy_templates(self) -> None:
        assert "{summary}" in load_prompt_template("poster_text_prompt.txt")
        assert "{summary}" in load_prompt_template("promotion_prompt.txt")

    def test_loads_custom_directory(self, tmp_path: Path) -> None:
        (tmp_path / "custom.txt").write_text("Hello {summary}", encoding="utf-8")
        assert load_prompt_template("custom.txt", tmp_path) == "Hello {summary}"

    def test_missing_file_raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(PromptTemplateError, match="Failed to load prompt template"):
            load_prompt_template("nope.txt", tmp_path)
