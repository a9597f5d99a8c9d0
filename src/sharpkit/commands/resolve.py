"""Shared helpers for the file/position based commands."""

from __future__ import annotations

import os

import click

from sharpkit.config import Settings, load_settings
from sharpkit.document import Position, TextDocument
from sharpkit.exit_codes import FileMissingError
from sharpkit.host import EditSink, Formatter, HostContext, MemoryEditSink


def load_document(path: str) -> TextDocument:
    """Read *path*; raise FileMissingError when it is not a readable file."""
    if not os.path.isfile(path):
        raise FileMissingError(path)
    try:
        return TextDocument.from_file(path)
    except OSError:
        raise FileMissingError(path) from None


def to_position(document: TextDocument, line: int, column: int) -> Position:
    """Convert a 1-based editor line/column to a clamped 0-based Position."""
    if line < 1 or column < 1:
        raise click.BadParameter("line and column are 1-based", param_hint="--line/--column")
    return document.clamp(Position(line - 1, column - 1))


def settings_for(path: str, **overrides) -> Settings:
    """Settings for the project containing *path*; None overrides are ignored."""
    return load_settings(os.path.dirname(os.path.abspath(path)), overrides=overrides)


def echo_notify(level: str, message: str) -> None:
    """Host message channel for the CLI: everything goes to stderr."""
    prefix = "Error: " if level == "error" else ""
    click.echo(f"{prefix}{message}", err=True)


def cli_context(settings: Settings, sink: EditSink | None = None,
                formatter: Formatter | None = None) -> HostContext:
    return HostContext(
        settings=settings,
        sink=sink or MemoryEditSink(),
        formatter=formatter,
        notify=echo_notify,
    )
