"""Host collaborators handed explicitly to the edit applier.

``HostContext`` replaces process-wide state: it carries the settings for
this invocation, the channel for user-visible messages, the sink that
commits edits, and the formatter used after a change.
"""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable

from sharpkit.config import Settings
from sharpkit.document import TextDocument, TextEdit, apply_edits

log = logging.getLogger(__name__)


class EditRejectedError(Exception):
    """The sink refused an edit batch; nothing from that batch was written."""


class EditSink(ABC):
    """Commits a batch of edits against one document snapshot."""

    @abstractmethod
    def apply(self, document: TextDocument, edits: list[TextEdit]) -> TextDocument:
        """Apply *edits* atomically and return the updated snapshot."""
        ...


class MemoryEditSink(EditSink):
    """Keeps results in memory; used for dry runs and tests."""

    def __init__(self):
        self.batches: list[list[TextEdit]] = []
        self.document: TextDocument | None = None

    def apply(self, document: TextDocument, edits: list[TextEdit]) -> TextDocument:
        self.batches.append(list(edits))
        self.document = document.with_text(apply_edits(document, edits))
        return self.document


class FileEditSink(EditSink):
    """Writes edits back to the document's file on disk.

    The batch is rejected when the file no longer matches the snapshot the
    edits were computed from.  Writes go through a temporary file and
    ``os.replace`` so readers never see a half-written file.
    """

    def apply(self, document: TextDocument, edits: list[TextEdit]) -> TextDocument:
        if not document.path:
            raise EditRejectedError("document has no file path")
        try:
            with open(document.path, "r", encoding="utf-8", errors="replace", newline="") as f:
                current = f.read()
        except OSError as exc:
            raise EditRejectedError(f"cannot read {document.path}: {exc}") from exc
        if current != document.text:
            raise EditRejectedError(f"{document.path} changed on disk since it was analysed")

        new_text = apply_edits(document, edits)
        directory = os.path.dirname(os.path.abspath(document.path))
        fd, tmp_path = tempfile.mkstemp(prefix=".sharpkit-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(new_text)
            os.replace(tmp_path, document.path)
        except OSError as exc:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise EditRejectedError(f"cannot write {document.path}: {exc}") from exc
        log.debug("wrote %d edit(s) to %s", len(edits), document.path)
        return document.with_text(new_text)


class Formatter(ABC):
    """Whole-document reformat collaborator."""

    @abstractmethod
    def format_document(self, document: TextDocument, tab_size: int) -> list[TextEdit]:
        """Return the edits that reformat *document*."""
        ...


def _no_notify(level: str, message: str) -> None:
    log.debug("%s: %s", level, message)


@dataclass
class HostContext:
    settings: Settings = field(default_factory=Settings)
    sink: EditSink = field(default_factory=MemoryEditSink)
    formatter: Formatter | None = None
    notify: Callable[[str, str], None] = _no_notify

    def info(self, message: str) -> None:
        self.notify("info", message)

    def error(self, message: str) -> None:
        self.notify("error", message)
