"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from interactive_parse.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from interactive_parse.configuration.loader import load_configuration
from interactive_parse.configuration.runtime_settings import LoggingSettings, PromptSettings


def test_scaffold_is_valid_yaml_with_every_section() -> None:
    parsed = yaml.safe_load(build_placeholder_configuration())

    assert set(parsed) == {"prompts", "logging"}
    assert set(parsed["prompts"]) == {
        "description_limit",
        "show_breadcrumbs",
        "erase_on_backtrack",
        "checkbox_for_unit_enums",
    }


def test_written_scaffold_loads_as_default_configuration(tmp_path: Path) -> None:
    written = write_placeholder_configuration(tmp_path / "interactive-parse.yaml")

    configuration = load_configuration(written)

    assert configuration.prompts == PromptSettings()
    assert configuration.logging == LoggingSettings()


def test_existing_file_is_not_overwritten(tmp_path: Path) -> None:
    target = tmp_path / "interactive-parse.yaml"
    target.write_text("keep: me\n", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(target)

    assert target.read_text(encoding="utf-8") == "keep: me\n"
