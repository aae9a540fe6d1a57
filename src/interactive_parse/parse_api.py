"""Public entry points driving one interactive parse session."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from interactive_parse.configuration.runtime_settings import PromptSettings
from interactive_parse.navigation.navigation_stack import NavigationStackError
from interactive_parse.navigation.walk_outcomes import NavigationSignal, ParseOutcome, Produced
from interactive_parse.prompting.prompt_gateway import PromptGateway
from interactive_parse.prompting.questionary_prompts import QuestionaryPromptGateway
from interactive_parse.schema_management.schema_models import SchemaNode
from interactive_parse.schema_management.schema_projection import build_schema_tree
from interactive_parse.walking.schema_walker import SchemaWalker
from interactive_parse.walking.value_assembly import ValueAssemblyError

_LOGGER = logging.getLogger(__name__)


def parse_to_generic(
    schema: SchemaNode | Mapping[str, Any],
    *,
    prompts: PromptGateway | None = None,
    settings: PromptSettings | None = None,
) -> ParseOutcome:
    """Prompt for a value of ``schema`` and return it as plain JSON-compatible data.

    ``schema`` is either an already built schema node tree or a JSON Schema
    document. Without ``prompts`` the session runs in the terminal.
    """
    root = build_schema_tree(schema) if isinstance(schema, Mapping) else schema
    return _run_session(root, prompts=prompts, settings=settings)


def parse_to_object(
    target: Any,
    *,
    prompts: PromptGateway | None = None,
    settings: PromptSettings | None = None,
) -> ParseOutcome:
    """Prompt for an instance of ``target``, any type pydantic can build a JSON Schema for.

    Raises:
      ValueAssemblyError: If the collected answers do not validate as ``target``.
    """
    adapter: TypeAdapter[Any] = TypeAdapter(target)
    outcome = parse_to_generic(adapter.json_schema(), prompts=prompts, settings=settings)
    if outcome.aborted:
        return outcome
    try:
        return ParseOutcome.completed(adapter.validate_python(outcome.value))
    except ValidationError as exc:
        generated = json.dumps(outcome.value, indent=2, default=str)
        raise ValueAssemblyError(
            f"interactive-parse generated this value:\n{generated}\n{exc}"
        ) from exc


def _run_session(
    root: SchemaNode, *, prompts: PromptGateway | None, settings: PromptSettings | None
) -> ParseOutcome:
    settings = settings or PromptSettings()
    gateway = prompts or QuestionaryPromptGateway(erase_on_backtrack=settings.erase_on_backtrack)
    walker = SchemaWalker(gateway, settings=settings)

    result = walker.walk(root)
    if walker.stack.peek_depth() != 0:
        raise NavigationStackError(
            f"Navigation stack not empty after walk: {walker.stack.peek_depth()} frames left."
        )
    if result is NavigationSignal.CANCEL:
        _LOGGER.info("Parse session cancelled.")
        return ParseOutcome.abort()
    if result is NavigationSignal.BACKTRACK:
        _LOGGER.info("Backtracked past the first prompt; ending parse session.")
        return ParseOutcome.abort()
    assert isinstance(result, Produced)
    return ParseOutcome.completed(result.value)
