"""Brace-depth re-indenter used as the default reformat pass.

Only leading whitespace is touched.  Lines are indented one unit per open
``{``; ``case``/``default`` bodies get one extra unit.  Continuation lines
(wrapped parameter lists, fluent chains, unbraced ``if`` bodies) keep their
offset relative to the statement they continue.  Lines that start inside a
block comment or a multi-line string, and preprocessor lines, are left
alone.
"""

from __future__ import annotations

import re

from sharpkit.document import Position, Range, TextDocument, TextEdit
from sharpkit.host import Formatter

_LEADING_WS_RE = re.compile(r"^[ \t]*")
_LABEL_RE = re.compile(r"^(case\b.*|default\s*):$")

# A statement is complete when its last code character is one of these.
_STATEMENT_END = (";", "{", "}", ",", ":", "]")


def strip_code(line: str, state: str | None) -> tuple[str, str | None]:
    """Remove comments and literals from *line*.

    *state* is the lexer state carried over from the previous line:
    None, ``"block"`` (inside ``/* */``), ``"verbatim"`` (inside ``@"..."``)
    or ``"raw"`` (inside a triple-quoted raw string).  Returns the remaining
    code and the state at the end of the line.
    """
    out = []
    i, n = 0, len(line)
    while i < n:
        if state == "block":
            end = line.find("*/", i)
            if end < 0:
                return "".join(out), state
            i, state = end + 2, None
            continue
        if state == "raw":
            end = line.find('"""', i)
            if end < 0:
                return "".join(out), state
            i, state = end + 3, None
            out.append('""')
            continue
        if state == "verbatim":
            while i < n:
                if line[i] == '"':
                    if line.startswith('""', i):
                        i += 2
                        continue
                    state = None
                    out.append('""')
                    i += 1
                    break
                i += 1
            continue

        ch = line[i]
        if line.startswith("//", i):
            break
        if line.startswith("/*", i):
            i, state = i + 2, "block"
        elif line.startswith('"""', i):
            i, state = i + 3, "raw"
        elif line.startswith(('@"', '$@"', '@$"'), i):
            i, state = line.index('"', i) + 1, "verbatim"
        elif ch in "\"'":
            i += 1
            while i < n and line[i] != ch:
                i += 2 if line[i] == "\\" else 1
            i += 1
            out.append(ch * 2)
        else:
            out.append(ch)
            i += 1
    return "".join(out), state


class BraceIndentFormatter(Formatter):
    """Re-indent a C# document by brace depth."""

    def format_document(self, document: TextDocument, tab_size: int) -> list[TextEdit]:
        unit = document.indent_unit(tab_size)
        edits = []
        depth = parens = shift = 0
        state = None
        case_depths: list[int] = []
        prev_code = ""

        for line_no, line in enumerate(document.lines):
            starts_inside = state is not None
            code, state = strip_code(line, state)
            code = code.strip()
            stripped = line.strip()

            if not (starts_inside or not stripped or stripped.startswith("#")):
                old_ws = _LEADING_WS_RE.match(line).group(0)
                level = depth - 1 if code.startswith("}") else depth
                is_label = bool(_LABEL_RE.match(code))
                if case_depths and case_depths[-1] == level and not is_label and not code.startswith("}"):
                    level += 1

                continuation = bool(code) and not code.startswith(("{", "}")) and (
                    parens > 0 or (prev_code and not prev_code.endswith(_STATEMENT_END))
                )
                if continuation:
                    new_ws = unit[0] * max(len(old_ws) + shift, 0)
                else:
                    new_ws = unit * max(level, 0)
                    if code:
                        shift = len(new_ws) - len(old_ws)

                if new_ws != old_ws:
                    edits.append(TextEdit(
                        Range(Position(line_no, 0), Position(line_no, len(old_ws))),
                        new_ws,
                    ))
                if is_label and not (case_depths and case_depths[-1] == depth):
                    case_depths.append(depth)

            depth = max(depth + code.count("{") - code.count("}"), 0)
            while case_depths and case_depths[-1] > depth:
                case_depths.pop()
            parens = max(parens + code.count("(") + code.count("[") - code.count(")") - code.count("]"), 0)
            if code:
                prev_code = code
        return edits
