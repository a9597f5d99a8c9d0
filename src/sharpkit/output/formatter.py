"""Plain-text and JSON output helpers shared by the CLI and the MCP server."""

from __future__ import annotations

import json as _json
from datetime import datetime, timezone

ENVELOPE_SCHEMA_VERSION = "1.0.0"
ENVELOPE_SCHEMA_NAME = "sharpkit-envelope-v1"

# Commands that write to disk; their envelopes must not be cached.
_MUTATING_COMMANDS = {"apply", "config"}


def loc(path: str, line: int | None = None, column: int | None = None) -> str:
    if line is None:
        return path
    if column is None:
        return f"{path}:{line}"
    return f"{path}:{line}:{column}"


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    if not rows:
        return "(none)"
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(widths)]):
            widths[i] = max(widths[i], len(str(cell)))
    lines = [
        "  ".join(h.ljust(widths[i]) for i, h in enumerate(headers)),
        "  ".join("-" * w for w in widths),
    ]
    for row in rows:
        lines.append("  ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
    return "\n".join(lines)


def to_json(data) -> str:
    """Serialize data to a JSON string with deterministic key ordering."""
    return _json.dumps(data, indent=2, default=str, sort_keys=True)


def json_envelope(command: str, summary: dict | None = None, **payload) -> dict:
    """Wrap command output in a self-describing envelope.

    The timestamp lives in ``_meta`` so the content keys stay identical
    across invocations::

        {
            "schema":  "sharpkit-envelope-v1",
            "command": "actions",
            "version": "<current>",
            "summary": { ... },
            "_meta":   {"timestamp": "...", "cacheable": true},
            ...payload
        }
    """
    ts = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    out: dict = {
        "schema": ENVELOPE_SCHEMA_NAME,
        "schema_version": ENVELOPE_SCHEMA_VERSION,
        "command": command,
        "version": _get_version(),
        "summary": summary or {},
    }
    out.update(payload)
    out["_meta"] = {
        "timestamp": ts,
        "cacheable": command not in _MUTATING_COMMANDS,
    }
    return out


def _get_version() -> str:
    from sharpkit import __version__

    return __version__
