"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class PromptSettings:
    """How prompts are labelled and redrawn."""

    description_limit: int = 60
    show_breadcrumbs: bool = True
    erase_on_backtrack: bool = True
    checkbox_for_unit_enums: bool = False


@dataclass(frozen=True)
class LoggingSettings:
    """Diagnostic logging configuration."""

    level: str = "WARNING"


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None = None
    prompts: PromptSettings = field(default_factory=PromptSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
