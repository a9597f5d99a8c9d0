"""Click CLI entry point."""

import logging
import os
import sys

# Fix Unicode output on Windows consoles (cp1253, cp1252, etc.)
if sys.platform == "win32" and not os.environ.get("PYTHONIOENCODING"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

import click

from sharpkit.commands.cmd_actions import actions
from sharpkit.commands.cmd_apply import apply_cmd
from sharpkit.commands.cmd_config import config
from sharpkit.commands.cmd_namespace import namespace
from sharpkit.commands.cmd_refs import refs
from sharpkit.mcp_server import mcp_cmd

# Registered up front: every command is cheap to import.
_COMMANDS = {
    "actions": actions,
    "apply": apply_cmd,
    "namespace": namespace,
    "refs": refs,
    "config": config,
    "mcp": mcp_cmd,
}


class SharpkitGroup(click.Group):
    """Lists commands in registration order instead of alphabetically."""

    def list_commands(self, ctx):
        return list(_COMMANDS)


@click.group(cls=SharpkitGroup, commands=_COMMANDS)
@click.version_option(package_name="sharpkit")
@click.option("--json", "json_mode", is_flag=True, help="Output in JSON format")
@click.option("-v", "--verbose", is_flag=True, help="Log scanner and resolver decisions to stderr")
@click.pass_context
def cli(ctx, json_mode, verbose):
    """sharpkit: C# refactoring code actions and namespace resolution."""
    ctx.ensure_object(dict)
    ctx.obj["json"] = json_mode
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
