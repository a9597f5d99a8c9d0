"""Regex detectors for C# class, property, and signature shapes.

These are line heuristics, not a parser.  Known boundaries:

* A property whose accessor body spans several lines
  (``{`` / ``get;`` / ``}`` on separate lines) is not recognised.
* A class declaration must carry an explicit access modifier.
* Parameter lists are split on top-level ``,`` only; a fragment with
  unbalanced brackets is dropped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

log = logging.getLogger(__name__)

# ── Regex patterns ────────────────────────────────────────────────────────────

# public static class Foo / internal sealed partial class Bar
_RE_CLASS = re.compile(
    r"(private|internal|public|protected)\s+(?:(?:static|sealed|abstract|partial|unsafe|new)\s+)*class\s+(\w+)"
)

# public int Age { get; } / public string Name { get; private set; }
_RE_READONLY_PROPERTY = re.compile(
    r"(public|private|protected)\s+([\w.<>\[\]?]+)\s+(\w+)\s*\{\s*(get;)\s*(private\s+)?(set;)?\s*\}"
)

# public Foo(int a,\n string b)  -- modifier and "(" share a line, the
# parameter list may wrap.
_RE_SIGNATURE = re.compile(r"(public|private|protected)\s(.*?)\(([\s\S]*?)\)", re.IGNORECASE)

_PARAMETER_MODIFIERS = frozenset({"ref", "out", "in", "params", "this", "scoped"})

# [FromBody] / [NotNull, CallerMemberName] leading a parameter
_RE_ATTRIBUTE = re.compile(r"^\s*(?:\[[^\]]*\]\s*)+")


@dataclass(frozen=True)
class ClassDefinition:
    start_line: int
    name: str
    modifier: str
    statement: str
    end_line: int = -1


@dataclass(frozen=True)
class PropertyDefinition:
    owner: ClassDefinition
    modifier: str
    type: str
    name: str
    line_number: int
    statement: str


@dataclass(frozen=True)
class SignatureMatch:
    modifier: str
    name: str
    parameters: str
    offset: int


def match_class(line_text: str, line_number: int = 0) -> ClassDefinition | None:
    """Return a ClassDefinition if *line_text* declares a class."""
    m = _RE_CLASS.search(line_text)
    if not m:
        return None
    return ClassDefinition(
        start_line=line_number,
        name=m.group(2),
        modifier=m.group(1),
        statement=m.group(0),
    )


def match_readonly_property(line_text: str) -> tuple[str, str, str, str] | None:
    """Match a single-line auto property.

    Returns ``(modifier, type, name, statement)`` or None.
    """
    m = _RE_READONLY_PROPERTY.search(line_text)
    if not m:
        return None
    return m.group(1), m.group(2), m.group(3), m.group(0)


def match_signature(text: str) -> SignatureMatch | None:
    """Find the first ``<modifier> <name>(<params>)`` shape in a text window."""
    m = _RE_SIGNATURE.search(text)
    if not m:
        return None
    return SignatureMatch(
        modifier=m.group(1),
        name=m.group(2).strip(),
        parameters=m.group(3),
        offset=m.start(),
    )


def _split_top_level(raw: str) -> list[str]:
    """Split on commas outside brackets and string literals."""
    parts, current = [], []
    depth = 0
    quote = None
    for ch in raw:
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in "<([{":
            depth += 1
        elif ch in ">)]}":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts


def _balanced(text: str) -> bool:
    return all(text.count(o) == text.count(c) for o, c in ("<>", "()", "[]"))


def parse_parameters(raw: str) -> list[tuple[str, str]]:
    """Split a raw parameter list into ``(type, name)`` pairs.

    Leading attributes, parameter modifiers (``ref``, ``out``, ``this`` ...)
    and default values are skipped.  Fragments with fewer than two tokens
    or with unbalanced brackets are dropped.
    """
    params = []
    for part in _split_top_level(raw):
        declaration = _RE_ATTRIBUTE.sub("", part.split("=", 1)[0])
        if not _balanced(declaration):
            log.debug("skipping unbalanced parameter %r", part.strip())
            continue
        tokens = [t for t in declaration.split() if t not in _PARAMETER_MODIFIERS]
        if len(tokens) < 2:
            continue
        params.append((" ".join(tokens[:-1]), tokens[-1]))
    return params


def find_parameter_type(raw: str, name: str) -> str | None:
    """Return the declared type of parameter *name*; first match wins."""
    for param_type, param_name in parse_parameters(raw):
        if param_name == name:
            return param_type
    log.debug("parameter %r not found in (%s)", name, raw.strip())
    return None
