"""Resolve the C# namespace for a source path."""

from __future__ import annotations

import click

from sharpkit.output.formatter import json_envelope, to_json
from sharpkit.project.namespace import NamespaceResolver


@click.command("namespace")
@click.argument("path", type=click.Path())
@click.option(
    "--workspace", "-w",
    type=click.Path(file_okay=False),
    default=None,
    help="Workspace root used when no project file is found.",
)
@click.pass_context
def namespace(ctx, path, workspace):
    """Print the namespace a file at PATH should declare.

    PATH does not need to exist yet.  The nearest *.csproj RootNamespace
    wins, then project.json's tooling.defaultNamespace, then the
    directory layout.
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    resolver = NamespaceResolver(path, workspace_root=workspace)
    result = resolver.get_namespace()

    if json_mode:
        click.echo(to_json(json_envelope(
            "namespace",
            summary={"namespace": result},
            path=str(resolver.file_path),
        )))
        return
    click.echo(result)
