"""Command registry: maps code-action command ids to their handlers.

The table is built once at import time; dispatch is a dict lookup.
"""

from __future__ import annotations

from typing import Callable

from sharpkit.host import HostContext
from sharpkit.refactor.actions import (
    COMMAND_CTOR_FROM_PROPERTIES,
    COMMAND_INITIALIZE_MEMBER,
    CodeAction,
)
from sharpkit.refactor.transforms import (
    ApplyResult,
    execute_ctor_from_properties,
    execute_initialize_member,
)

CommandHandler = Callable[[CodeAction, HostContext], ApplyResult]

COMMAND_HANDLERS: dict[str, CommandHandler] = {
    COMMAND_CTOR_FROM_PROPERTIES: execute_ctor_from_properties,
    COMMAND_INITIALIZE_MEMBER: execute_initialize_member,
}


def get_handler(command: str) -> CommandHandler:
    try:
        return COMMAND_HANDLERS[command]
    except KeyError:
        raise ValueError(f"unknown command: {command}") from None


def execute_action(action: CodeAction, context: HostContext) -> ApplyResult:
    """Run the handler registered for *action*'s command."""
    return get_handler(action.command)(action, context)
