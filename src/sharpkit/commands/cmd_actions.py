"""List the code actions available at a position."""

from __future__ import annotations

import click

from sharpkit.commands.resolve import load_document, settings_for, to_position
from sharpkit.output.formatter import format_table, json_envelope, loc, to_json
from sharpkit.refactor.actions import provide_code_actions


@click.command("actions")
@click.argument("file", type=click.Path())
@click.option("--line", "-l", type=int, required=True, help="1-based line number")
@click.option("--column", "-c", type=int, default=1, show_default=True, help="1-based column")
@click.option("--tab-size", type=int, default=None, help="Override the configured tab size")
@click.pass_context
def actions(ctx, file, line, column, tab_size):
    """Show the code actions offered at FILE:LINE:COLUMN."""
    json_mode = ctx.obj.get("json") if ctx.obj else False
    document = load_document(file)
    position = to_position(document, line, column)
    available = provide_code_actions(document, position, settings_for(file, tab_size=tab_size))

    if json_mode:
        click.echo(to_json(json_envelope(
            "actions",
            summary={"count": len(available), "location": loc(file, line, column)},
            actions=[dict(a.to_dict(), index=i) for i, a in enumerate(available, 1)],
        )))
        return

    if not available:
        click.echo(f"No code actions at {loc(file, line, column)}")
        return
    rows = [[str(i), a.title, a.command] for i, a in enumerate(available, 1)]
    click.echo(format_table(["#", "title", "command"], rows))
