"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import Configuration, LoggingSettings, PromptSettings

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    unknown = sorted(set(parsed) - {"prompts", "logging"})
    if unknown:
        raise ConfigurationError(f"Unknown configuration sections: {', '.join(unknown)}")

    return Configuration(
        path=path,
        prompts=_parse_prompts_section(parsed.get("prompts")),
        logging=_parse_logging_section(parsed.get("logging")),
    )


def _parse_prompts_section(value: Any) -> PromptSettings:
    section = _optional_mapping(value, "prompts")
    defaults = PromptSettings()
    return PromptSettings(
        description_limit=_require_positive_int(
            section.get("description_limit", defaults.description_limit),
            "prompts.description_limit",
        ),
        show_breadcrumbs=_require_bool(
            section.get("show_breadcrumbs", defaults.show_breadcrumbs), "prompts.show_breadcrumbs"
        ),
        erase_on_backtrack=_require_bool(
            section.get("erase_on_backtrack", defaults.erase_on_backtrack),
            "prompts.erase_on_backtrack",
        ),
        checkbox_for_unit_enums=_require_bool(
            section.get("checkbox_for_unit_enums", defaults.checkbox_for_unit_enums),
            "prompts.checkbox_for_unit_enums",
        ),
    )


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    level = section.get("level", LoggingSettings().level)
    return LoggingSettings(level=normalize_log_level(level, "logging.level"))


def normalize_log_level(value: Any, field_name: str = "log level") -> str:
    """Return the upper-cased logging level name or raise ConfigurationError."""
    if not isinstance(value, str) or value.strip().upper() not in _LOG_LEVELS:
        raise ConfigurationError(f"{field_name} must be one of: {', '.join(_LOG_LEVELS)}.")
    return value.strip().upper()


def configure_logging(settings: LoggingSettings) -> None:
    """Route diagnostic logging to stderr at the configured level."""
    logging.basicConfig(
        level=getattr(logging, settings.level),
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
