"""Standardized CLI exit codes for sharpkit.

Exit code scheme:

    0  SUCCESS        -- command completed (including "no actions available")
    1  GENERAL_ERROR  -- unexpected failure, crash, unhandled exception
    2  USAGE_ERROR    -- invalid arguments, bad flags, unknown command (Click default)
    3  FILE_MISSING   -- the source file to analyse does not exist
    6  NO_ACTION      -- the requested code action is not offered at that position
    7  APPLY_FAILED   -- the edit batch was rejected (file changed, write failed)

Editors and agents can tell "nothing to do here" (6) apart from
"the change could not be written" (7).
"""

from __future__ import annotations

import sys

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_FILE_MISSING: int = 3
EXIT_NO_ACTION: int = 6
EXIT_APPLY_FAILED: int = 7

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments or flags)",
    EXIT_FILE_MISSING: "source file not found",
    EXIT_NO_ACTION: "no matching code action at this position",
    EXIT_APPLY_FAILED: "edit could not be applied",
}

# ---------------------------------------------------------------------------
# Custom exceptions (caught by the click error handler)
# ---------------------------------------------------------------------------


class SharpkitError(click.ClickException):
    """Base class for sharpkit errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class FileMissingError(SharpkitError):
    """Raised when the file to analyse does not exist."""

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}", EXIT_FILE_MISSING)


class NoActionError(SharpkitError):
    """Raised when the requested action is not available at the position."""

    def __init__(self, message: str = "No matching code action at this position."):
        super().__init__(message, EXIT_NO_ACTION)


class ApplyError(SharpkitError):
    """Raised when an edit batch could not be applied."""

    def __init__(self, message: str = "Edit could not be applied."):
        super().__init__(message, EXIT_APPLY_FAILED)


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------


def exit_with(code: int, message: str | None = None) -> None:
    """Print an optional message to stderr and exit with the given code."""
    if message:
        click.echo(f"Error: {message}", err=True)
    sys.exit(code)
