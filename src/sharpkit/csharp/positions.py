"""Line-scan resolvers for the class and constructor around a cursor.

All three walks are brace-unaware.  ``find_enclosing_class`` returns the
nearest class declaration *above* the line, so a sibling or nested class
declared between the real owner and the cursor wins.
"""

from __future__ import annotations

import logging

from sharpkit.csharp.scanner import ClassDefinition, match_class
from sharpkit.document import Position, TextDocument

log = logging.getLogger(__name__)

# How far the constructor walks look from the cursor line (inclusive).
_CTOR_SCAN_LINES = 5


def find_enclosing_class(document: TextDocument, from_line: int) -> ClassDefinition | None:
    """Walk upward from *from_line* and return the first class declaration."""
    line_no = min(from_line, document.line_count - 1)
    while line_no >= 0:
        found = match_class(document.line_at(line_no), line_no)
        if found:
            return found
        line_no -= 1
    return None


def find_constructor_body_start(document: TextDocument, position: Position) -> Position | None:
    """Return the start of the line after the constructor's opening brace.

    Scans the cursor line and the following lines; None means the body
    could not be located and no assignment can be placed.
    """
    last = min(position.line + _CTOR_SCAN_LINES, document.line_count)
    for line_no in range(max(position.line, 0), last):
        if "{" in document.line_at(line_no):
            return Position(line_no + 1, 0)
    log.debug("no opening brace within %d lines of line %d", _CTOR_SCAN_LINES, position.line)
    return None


def find_constructor_start(document: TextDocument, position: Position) -> Position:
    """Approximate the line just before the constructor signature.

    Picks the nearest blank line at or above the cursor (within the scan
    window) that is not above the enclosing class declaration.  Falls back
    to the cursor line itself.
    """
    owner = find_enclosing_class(document, position.line)
    if owner:
        first = max(position.line - _CTOR_SCAN_LINES, -1)
        for line_no in range(min(position.line, document.line_count - 1), first, -1):
            if document.is_blank(line_no) and line_no >= owner.start_line:
                return Position(line_no, 0)
    return Position(max(position.line, 0), 0)
