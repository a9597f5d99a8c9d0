"""Read-only text snapshots, positions, and text edits.

The code-action core never talks to an editor directly.  It reads a
``TextDocument`` (a snapshot of the file text) and produces ``TextEdit``
batches that an edit sink commits.  Lines and characters are 0-based.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_WORD_RE = re.compile(r"\w+")
_LEADING_WS_RE = re.compile(r"^[ \t]*")


@dataclass(frozen=True, order=True)
class Position:
    line: int
    character: int = 0

    def to_dict(self) -> dict:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position


@dataclass(frozen=True)
class TextEdit:
    """Replace ``range`` with ``new_text``; an empty range is an insertion."""

    range: Range
    new_text: str

    @classmethod
    def insert(cls, position: Position, text: str) -> "TextEdit":
        return cls(Range(position, position), text)

    def to_dict(self) -> dict:
        return {
            "start": self.range.start.to_dict(),
            "end": self.range.end.to_dict(),
            "new_text": self.new_text,
        }


class TextDocument:
    """An immutable, line-addressable snapshot of a source file."""

    def __init__(self, text: str, path: str | None = None):
        self._text = text
        self.path = path
        self.eol = "\r\n" if "\r\n" in text else "\n"
        self._lines = text.split("\n")
        # Keep line text free of the CR half of CRLF endings
        self._lines = [ln[:-1] if ln.endswith("\r") else ln for ln in self._lines]
        self._offsets = _line_offsets(text)

    @classmethod
    def from_file(cls, path: str) -> "TextDocument":
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            return cls(f.read(), path=path)

    @property
    def text(self) -> str:
        return self._text

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, line: int) -> str:
        if line < 0 or line >= len(self._lines):
            raise IndexError(f"line {line} out of range (0..{len(self._lines) - 1})")
        return self._lines[line]

    def is_blank(self, line: int) -> bool:
        return not self.line_at(line).strip()

    def clamp(self, position: Position) -> Position:
        """Clamp *position* into the document, the way editors do."""
        if position.line < 0:
            return Position(0, 0)
        if position.line >= len(self._lines):
            last = len(self._lines) - 1
            return Position(last, len(self._lines[last]))
        char = max(0, min(position.character, len(self._lines[position.line])))
        return Position(position.line, char)

    def offset_at(self, position: Position) -> int:
        pos = self.clamp(position)
        return self._offsets[pos.line] + pos.character

    def get_text(self, range: Range | None = None) -> str:
        if range is None:
            return self._text
        return self._text[self.offset_at(range.start):self.offset_at(range.end)]

    def word_range_at(self, position: Position) -> Range | None:
        """Return the range of the identifier under (or just before) *position*."""
        if position.line < 0 or position.line >= len(self._lines):
            return None
        for m in _WORD_RE.finditer(self._lines[position.line]):
            if m.start() <= position.character <= m.end():
                return Range(Position(position.line, m.start()), Position(position.line, m.end()))
        return None

    def indentation_of(self, line: int) -> str:
        return _LEADING_WS_RE.match(self.line_at(line)).group(0)

    def indent_unit(self, tab_size: int = 4) -> str:
        """Return a tab if most indented lines start with one, else *tab_size* spaces."""
        tabs = spaces = 0
        for line in self.lines:
            if line.startswith("\t"):
                tabs += 1
            elif line.startswith(" "):
                spaces += 1
        return "\t" if tabs > spaces else " " * tab_size

    def with_text(self, text: str) -> "TextDocument":
        return TextDocument(text, path=self.path)


def _line_offsets(text: str) -> list[int]:
    offsets = [0]
    for i, ch in enumerate(text):
        if ch == "\n":
            offsets.append(i + 1)
    return offsets


def apply_edits(document: TextDocument, edits: list[TextEdit]) -> str:
    """Apply a batch of edits computed against *document*'s snapshot.

    Offsets are resolved against the original text, then spliced back to
    front.  Edits at the same offset keep their batch order.
    """
    resolved = []
    for order, edit in enumerate(edits):
        start = document.offset_at(edit.range.start)
        end = document.offset_at(edit.range.end)
        if end < start:
            raise ValueError(f"edit range ends before it starts: {edit.range}")
        resolved.append((start, end, order, edit.new_text))

    text = document.text
    for start, end, _order, new_text in sorted(resolved, key=lambda r: (r[0], r[2]), reverse=True):
        text = text[:start] + new_text + text[end:]
    return text
