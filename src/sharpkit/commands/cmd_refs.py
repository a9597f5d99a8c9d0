"""List package and project references of the nearest project file."""

from __future__ import annotations

import os
from pathlib import Path

import click

from sharpkit.exit_codes import EXIT_ERROR, EXIT_FILE_MISSING, SharpkitError
from sharpkit.output.formatter import format_table, json_envelope, to_json
from sharpkit.project.csproj import CsprojReader
from sharpkit.project.namespace import CSPROJ_PATTERN, find_up


@click.command("refs")
@click.argument("path", type=click.Path(), default=".")
@click.pass_context
def refs(ctx, path):
    """Show the references declared by the *.csproj nearest to PATH."""
    json_mode = ctx.obj.get("json") if ctx.obj else False
    if path.endswith(".csproj") and os.path.isfile(path):
        csproj = path
    else:
        start = path if os.path.isdir(path) else os.path.dirname(os.path.abspath(path))
        found = find_up(CSPROJ_PATTERN, start)
        if found is None:
            raise SharpkitError(f"No *.csproj found at or above {path}", EXIT_FILE_MISSING)
        csproj = str(found)

    try:
        text = Path(csproj).read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        raise SharpkitError(f"Cannot read {csproj}: {exc.strerror or exc}", EXIT_ERROR) from None
    reader = CsprojReader(text)
    packages = reader.package_refs()
    projects = reader.project_refs()

    if json_mode:
        click.echo(to_json(json_envelope(
            "refs",
            summary={"packages": len(packages), "projects": len(projects)},
            project=csproj,
            root_namespace=reader.root_namespace(),
            package_refs=[p.to_dict() for p in packages],
            project_refs=[p.to_dict() for p in projects],
        )))
        return

    click.echo(f"Project: {csproj}")
    click.echo("")
    click.echo("Packages:")
    click.echo(format_table(["package", "version"], [[p.include, p.version or ""] for p in packages]))
    click.echo("")
    click.echo("Projects:")
    click.echo(format_table(["project"], [[p.include] for p in projects]))
