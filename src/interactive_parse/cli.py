"""Command line interface entry point."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from interactive_parse.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    LoggingSettings,
    configure_logging,
    load_configuration,
    normalize_log_level,
    write_placeholder_configuration,
)
from interactive_parse.navigation import NavigationStackError
from interactive_parse.parse_api import parse_to_generic
from interactive_parse.prompting import (
    PromptGateway,
    QuestionaryPromptGateway,
    ScriptedAnswerError,
    ScriptedPromptGateway,
)
from interactive_parse.schema_management import (
    SchemaError,
    SchemaNode,
    build_schema_tree,
    describe_schema,
    load_schema_document,
)


class CliError(Exception):
    """Custom CLI error."""


class SessionAborted(Exception):
    """Raised when the user cancels the prompt session."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="interactive-parse")
def cli() -> None:
    """Fill in JSON Schema shaped data through interactive terminal prompts."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML prompt configuration to write",
)
def generate_config(output_path: str) -> None:
    """Generate a commented YAML prompt configuration with the default values."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="show-schema")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON or YAML schema file",
)
def show_schema(schema_path: str) -> None:
    """Print the outline of prompts a schema file will produce."""
    try:
        root = _load_schema_tree(schema_path)
        outline = describe_schema(root)
    except (SchemaError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(outline)


@cli.command(name="prompt")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON or YAML schema file",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML prompt configuration file",
)
@click.option(
    "--answers",
    "answers_path",
    required=False,
    type=click.Path(path_type=str),
    help="Replay answers from a YAML/JSON list instead of prompting in the terminal",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write the collected value as JSON to this file instead of stdout",
)
@click.option(
    "--log-level",
    "log_level",
    required=False,
    help="Diagnostic log level (overrides the configuration file)",
)
def prompt(
    schema_path: str,
    config_path: str | None,
    answers_path: str | None,
    output_path: str | None,
    log_level: str | None,
) -> None:
    """Prompt for a value matching the schema and print it as JSON.

    Press Escape to go back one prompt and Ctrl-C to abort.
    """
    try:
        configuration = load_configuration(config_path) if config_path else Configuration()
        if log_level:
            configuration = Configuration(
                path=configuration.path,
                prompts=configuration.prompts,
                logging=LoggingSettings(level=normalize_log_level(log_level)),
            )
        configure_logging(configuration.logging)
        root = _load_schema_tree(schema_path)
        gateway: PromptGateway
        if answers_path:
            gateway = ScriptedPromptGateway(_load_answers(answers_path))
        else:
            gateway = QuestionaryPromptGateway(
                erase_on_backtrack=configuration.prompts.erase_on_backtrack
            )
        outcome = parse_to_generic(root, prompts=gateway, settings=configuration.prompts)
    except (
        ConfigurationError,
        SchemaError,
        ScriptedAnswerError,
        NavigationStackError,
        OSError,
    ) as exc:
        raise CliError(str(exc)) from exc
    if outcome.aborted:
        raise SessionAborted()

    rendered = json.dumps(outcome.value, indent=2, ensure_ascii=False)
    if output_path:
        try:
            Path(output_path).write_text(rendered + "\n", encoding="utf-8")
        except OSError as exc:
            raise CliError(str(exc)) from exc
        click.echo(str(Path(output_path).resolve()))
    else:
        click.echo(rendered)


def _load_schema_tree(schema_path: str) -> SchemaNode:
    path = Path(schema_path)
    if not path.exists():
        raise SchemaError(f"Schema file not found: {path}")
    schema_format = "yaml" if path.suffix.lower() in {".yaml", ".yml"} else "json"
    document = load_schema_document(path.read_text(encoding="utf-8"), schema_format=schema_format)
    return build_schema_tree(document)


def _load_answers(answers_path: str) -> list[Any]:
    path = Path(answers_path)
    if not path.exists():
        raise CliError(f"Answers file not found: {path}")
    try:
        answers = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise CliError(f"Failed to parse answers file: {exc}") from exc
    if not isinstance(answers, list):
        raise CliError("Answers file must contain a list of answers.")
    return answers


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except SessionAborted:
        click.echo("Aborted.", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
