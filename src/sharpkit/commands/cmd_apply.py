"""Execute one code action and write the result back to the file."""

from __future__ import annotations

import difflib

import click

from sharpkit.commands.resolve import cli_context, load_document, settings_for, to_position
from sharpkit.exit_codes import NoActionError
from sharpkit.host import FileEditSink, MemoryEditSink
from sharpkit.output.formatter import json_envelope, loc, to_json
from sharpkit.refactor.actions import CodeAction, provide_code_actions
from sharpkit.refactor.formatting import BraceIndentFormatter
from sharpkit.refactor.registry import execute_action


def select_action(available: list[CodeAction], index: int | None, title: str | None) -> CodeAction:
    """Pick an action by 1-based index or by (case-insensitive) title."""
    if index is not None:
        if 1 <= index <= len(available):
            return available[index - 1]
        raise NoActionError(f"No code action #{index} here ({len(available)} available).")
    wanted = title.strip().lower()
    for action in available:
        if action.title.lower() == wanted:
            return action
    # Let "field" or "readonly property" pick the matching initializer
    partial = [a for a in available if wanted in a.title.lower()]
    if len(partial) == 1:
        return partial[0]
    raise NoActionError(f"No code action titled {title!r} here.")


def unified_diff(path: str, before: str, after: str) -> str:
    return "".join(difflib.unified_diff(
        before.splitlines(keepends=True),
        after.splitlines(keepends=True),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    ))


@click.command("apply")
@click.argument("file", type=click.Path())
@click.option("--line", "-l", type=int, required=True, help="1-based line number")
@click.option("--column", "-c", type=int, default=1, show_default=True, help="1-based column")
@click.option("--index", "-n", "index", type=int, default=None, help="1-based action number from `sharpkit actions`")
@click.option("--title", "-t", default=None, help="Action title (or an unambiguous part of it)")
@click.option("--dry-run", is_flag=True, help="Print the diff instead of writing the file")
@click.option("--tab-size", type=int, default=None, help="Override the configured tab size")
@click.option("--no-reformat", is_flag=True, help="Skip the re-indent pass after the edit")
@click.pass_context
def apply_cmd(ctx, file, line, column, index, title, dry_run, tab_size, no_reformat):
    """Apply a code action at FILE:LINE:COLUMN.

    Choose the action with ``--index`` (as listed by ``sharpkit actions``)
    or ``--title``:

    \b
      sharpkit apply src/Point.cs -l 5 -c 20 --title field
      sharpkit apply src/Point.cs -l 3 --index 1 --dry-run
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    if (index is None) == (title is None):
        raise click.UsageError("pass exactly one of --index or --title")

    document = load_document(file)
    position = to_position(document, line, column)
    settings = settings_for(file, tab_size=tab_size, reformat_after_change=False if no_reformat else None)
    action = select_action(provide_code_actions(document, position, settings), index, title)

    sink = MemoryEditSink() if dry_run else FileEditSink()
    context = cli_context(settings, sink=sink, formatter=BraceIndentFormatter())
    result = execute_action(action, context)
    after = result.document.text if result.document is not None else document.text

    if json_mode:
        click.echo(to_json(json_envelope(
            "apply",
            summary={
                "action": action.title,
                "changed": result.changed,
                "dry_run": dry_run,
                "location": loc(file, line, column),
            },
            result=result.to_dict(),
            diff=unified_diff(file, document.text, after),
        )))
        return

    if not result.changed:
        click.echo(f"Nothing to do: {action.title} is already applied.")
        return
    if dry_run:
        click.echo(unified_diff(file, document.text, after), nl=False)
        return
    click.echo(f"Applied {action.title!r} to {file} ({len(result.edits)} edit(s))")
