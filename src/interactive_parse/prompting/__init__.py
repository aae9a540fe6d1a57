"""Prompting domain exports."""

from .prompt_gateway import PromptGateway
from .questionary_prompts import QuestionaryPromptGateway
from .scripted_prompts import (
    BACKTRACK_TOKEN,
    CANCEL_TOKEN,
    AskedPrompt,
    ScriptedAnswerError,
    ScriptedPromptGateway,
)

__all__ = [
    "BACKTRACK_TOKEN",
    "CANCEL_TOKEN",
    "AskedPrompt",
    "PromptGateway",
    "QuestionaryPromptGateway",
    "ScriptedAnswerError",
    "ScriptedPromptGateway",
]
