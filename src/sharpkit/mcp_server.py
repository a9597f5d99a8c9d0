"""MCP (Model Context Protocol) server for sharpkit.

Exposes the code actions and the namespace resolver as MCP tools so that
coding agents can ask "what can I do here?" and apply the answer.

Usage:
    sharpkit mcp                    # stdio
    sharpkit mcp --transport sse    # SSE on localhost:8000
"""

from __future__ import annotations

import asyncio
import logging

import click

from sharpkit.commands.resolve import load_document, settings_for
from sharpkit.document import Position
from sharpkit.exit_codes import (
    EXIT_APPLY_FAILED,
    EXIT_ERROR,
    EXIT_FILE_MISSING,
    EXIT_NO_ACTION,
    SharpkitError,
    exit_with,
)
from sharpkit.host import FileEditSink, HostContext, MemoryEditSink
from sharpkit.output.formatter import json_envelope
from sharpkit.project.csproj import CsprojReader
from sharpkit.project.namespace import CSPROJ_PATTERN, NamespaceResolver, find_up
from sharpkit.refactor.actions import provide_code_actions
from sharpkit.refactor.formatting import BraceIndentFormatter
from sharpkit.refactor.registry import execute_action

try:
    from fastmcp import FastMCP
except ImportError:
    FastMCP = None

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Server instance
# ---------------------------------------------------------------------------

if FastMCP is not None:
    mcp = FastMCP(
        "sharpkit",
        instructions=(
            "C# refactoring helpers. Positions are 0-based (line, character). "
            "Call sharpkit_code_actions first, then sharpkit_apply_action with "
            "the index of the action you want. Only sharpkit_apply_action writes files."
        ),
    )
else:
    mcp = None

_REGISTERED_TOOLS: list[str] = []
_NON_READ_ONLY_TOOLS = {"sharpkit_apply_action"}


def _tool_annotations(name: str) -> dict:
    read_only = name not in _NON_READ_ONLY_TOOLS
    return {
        "readOnlyHint": read_only,
        "idempotentHint": read_only,
        "openWorldHint": False,
    }


def _tool(name: str, description: str = ""):
    """Register an MCP tool when fastmcp is installed; otherwise a no-op."""
    def decorator(fn):
        if mcp is None:
            return fn
        _REGISTERED_TOOLS.append(name)
        return mcp.tool(name=name, description=description or None, annotations=_tool_annotations(name))(fn)
    return decorator


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

_EXIT_CODE_MAP: dict[int, tuple[str, str]] = {
    EXIT_FILE_MISSING: ("FILE_NOT_FOUND", "check the path; it must point to an existing .cs file."),
    EXIT_NO_ACTION: ("NO_ACTION", "call sharpkit_code_actions at the same position to see what is offered."),
    EXIT_APPLY_FAILED: ("APPLY_FAILED", "the file changed on disk; list the actions again and retry."),
}


def _structured_error(error_dict: dict) -> dict:
    """Mark an error payload for MCP clients."""
    error_dict["isError"] = True
    error_dict.setdefault("error_code", "UNKNOWN")
    error_dict["retryable"] = error_dict["error_code"] == "APPLY_FAILED"
    error_dict["suggested_action"] = error_dict.get("hint", "check the error message")
    return error_dict


def _error_from(exc: SharpkitError) -> dict:
    code, hint = _EXIT_CODE_MAP.get(exc.exit_code, ("COMMAND_FAILED", "check arguments and try again."))
    return _structured_error({
        "error": exc.format_message(),
        "error_code": code,
        "hint": hint,
        "exit_code": exc.exit_code,
    })


def _position(document, line: int, character: int) -> Position:
    return document.clamp(Position(line, character))


def code_actions_payload(path: str, line: int, character: int) -> dict:
    try:
        document = load_document(path)
    except SharpkitError as exc:
        return _error_from(exc)
    position = _position(document, line, character)
    actions = provide_code_actions(document, position, settings_for(path))
    return json_envelope(
        "actions",
        summary={"count": len(actions)},
        actions=[dict(a.to_dict(), index=i) for i, a in enumerate(actions)],
    )


def apply_action_payload(path: str, line: int, character: int, index: int, dry_run: bool = False) -> dict:
    try:
        document = load_document(path)
        position = _position(document, line, character)
        settings = settings_for(path)
        actions = provide_code_actions(document, position, settings)
        if not 0 <= index < len(actions):
            raise SharpkitError(
                f"No code action #{index} here ({len(actions)} available).", EXIT_NO_ACTION,
            )
        action = actions[index]
        messages: list[dict] = []
        context = HostContext(
            settings=settings,
            sink=MemoryEditSink() if dry_run else FileEditSink(),
            formatter=BraceIndentFormatter(),
            notify=lambda level, message: messages.append({"level": level, "message": message}),
        )
        result = execute_action(action, context)
    except SharpkitError as exc:
        return _error_from(exc)
    return json_envelope(
        "apply",
        summary={"action": action.title, "changed": result.changed, "dry_run": dry_run},
        result=result.to_dict(),
        text=result.document.text if dry_run and result.document is not None else None,
        messages=messages,
    )


def namespace_payload(path: str, workspace_root: str = "") -> dict:
    resolver = NamespaceResolver(path, workspace_root=workspace_root or None)
    return json_envelope("namespace", summary={"namespace": resolver.get_namespace()},
                         path=str(resolver.file_path))


def project_refs_payload(path: str = ".") -> dict:
    csproj = find_up(CSPROJ_PATTERN, path)
    if csproj is None:
        return _structured_error({
            "error": f"No *.csproj found at or above {path}",
            "error_code": "FILE_NOT_FOUND",
            "hint": "pass a directory inside a C# project.",
            "exit_code": EXIT_FILE_MISSING,
        })
    try:
        text = csproj.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        return _structured_error({"error": str(exc), "error_code": "COMMAND_FAILED",
                                  "hint": "check file permissions.", "exit_code": EXIT_ERROR})
    reader = CsprojReader(text)
    packages, projects = reader.package_refs(), reader.project_refs()
    return json_envelope(
        "refs",
        summary={"packages": len(packages), "projects": len(projects)},
        project=str(csproj),
        root_namespace=reader.root_namespace(),
        package_refs=[p.to_dict() for p in packages],
        project_refs=[p.to_dict() for p in projects],
    )


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@_tool(name="sharpkit_code_actions",
       description="List the refactoring code actions available at a 0-based position in a C# file.")
async def sharpkit_code_actions(path: str, line: int, character: int = 0) -> dict:
    """Code actions at ``path:line:character``.

    Returns constructor-from-properties and initialize-member actions with
    the exact text each one would insert.  Nothing is written.
    """
    return await asyncio.to_thread(code_actions_payload, path, line, character)


@_tool(name="sharpkit_apply_action",
       description="Apply one code action (by index from sharpkit_code_actions) and write the file.")
async def sharpkit_apply_action(path: str, line: int, character: int, index: int,
                                dry_run: bool = False) -> dict:
    return await asyncio.to_thread(apply_action_payload, path, line, character, index, dry_run)


@_tool(name="sharpkit_namespace",
       description="Namespace a C# file at this path should declare (file may not exist yet).")
async def sharpkit_namespace(path: str, workspace_root: str = "") -> dict:
    return await asyncio.to_thread(namespace_payload, path, workspace_root)


@_tool(name="sharpkit_project_refs",
       description="Package and project references of the nearest *.csproj.")
async def sharpkit_project_refs(path: str = ".") -> dict:
    return await asyncio.to_thread(project_refs_payload, path)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


@click.command("mcp")
@click.option("--transport", type=click.Choice(["stdio", "sse", "streamable-http"]), default="stdio",
              help="transport protocol (default: stdio)")
@click.option("--host", default="127.0.0.1", help="host for network transports")
@click.option("--port", type=int, default=8000, help="port for network transports")
@click.option("--list-tools", is_flag=True, help="list registered tools and exit")
def mcp_cmd(transport, host, port, list_tools):
    """Start the sharpkit MCP server.

    \b
    requires:
      pip install sharpkit[mcp]
    """
    if mcp is None:
        exit_with(
            EXIT_ERROR,
            "fastmcp is required for the MCP server.\n"
            "install it with:  pip install sharpkit[mcp]",
        )

    if list_tools:
        click.echo(f"{len(_REGISTERED_TOOLS)} tools registered:\n")
        for t in sorted(_REGISTERED_TOOLS):
            click.echo(f"  {t}")
        return

    log.debug("starting MCP server (%s)", transport)
    if transport == "stdio":
        mcp.run()
    else:
        mcp.run(transport=transport, host=host, port=port)


if __name__ == "__main__":
    if mcp is None:
        raise SystemExit(
            "fastmcp is required for the MCP server.\n"
            "Install it with:  pip install sharpkit[mcp]"
        )
    mcp.run()
