"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "interactive-parse.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Prompt configuration for interactive-parse.
# Every key is optional; the values below are the defaults.

prompts:
  # Doc hints longer than this many characters are cut off with "...".
  description_limit: 60
  # Prefix prompt hints with the field path, e.g. subcommand.Clone.address[1].
  show_breadcrumbs: true
  # Erase already-answered lines from the terminal when going back with Escape.
  erase_on_backtrack: true
  # Ask for sequences of plain enum values with one multi-select prompt
  # instead of an "Add element?" loop.
  checkbox_for_unit_enums: false

logging:
  # One of CRITICAL, ERROR, WARNING, INFO, DEBUG. Diagnostics go to stderr.
  level: WARNING
"""


def build_placeholder_configuration() -> str:
    """Build a YAML prompt configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
