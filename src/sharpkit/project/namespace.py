"""Namespace resolution for a C# source path.

Strategies, tried in order:

1. nearest ``*.csproj`` with a ``RootNamespace``;
2. nearest ``project.json`` with ``tooling.defaultNamespace``;
3. the directory layout alone, relative to the directory above the project
   file (or the workspace root, or the filesystem root).

The target file does not need to exist, so a namespace can be computed for a
file that is about to be created.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sharpkit.project.csproj import CsprojReader
from sharpkit.project.project_json import ProjectJsonReader

log = logging.getLogger(__name__)

CSPROJ_PATTERN = "*.csproj"
PROJECT_JSON = "project.json"


def find_up(pattern: str, cwd: str | Path) -> Path | None:
    """First file matching *pattern* in *cwd* or any of its ancestors.

    Within one directory the lexicographically first match wins.
    """
    current = Path(os.path.abspath(cwd))
    while True:
        matches = sorted(p for p in current.glob(pattern) if p.is_file())
        if matches:
            return matches[0]
        if current == current.parent:
            return None
        current = current.parent


def _read(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        log.debug("cannot read %s: %s", path, exc)
        return None


class NamespaceResolver:
    def __init__(self, file_path: str | Path, workspace_root: str | Path | None = None):
        self.file_path = Path(os.path.abspath(file_path))
        self.workspace_root = Path(os.path.abspath(workspace_root)) if workspace_root else None

    @property
    def directory(self) -> Path:
        return self.file_path.parent

    def get_namespace(self) -> str:
        for strategy in (self.from_csproj, self.from_project_json):
            namespace = strategy()
            if namespace is not None:
                return namespace
        return self.from_file_path()

    def from_csproj(self) -> str | None:
        csproj = find_up(CSPROJ_PATTERN, self.directory)
        if csproj is None:
            return None
        text = _read(csproj)
        root_namespace = CsprojReader(text).root_namespace() if text is not None else None
        if root_namespace is None:
            log.debug("%s declares no RootNamespace", csproj)
            return None
        return self.full_namespace(root_namespace, csproj.parent)

    def from_project_json(self) -> str | None:
        manifest = find_up(PROJECT_JSON, self.directory)
        if manifest is None:
            return None
        text = _read(manifest)
        root_namespace = ProjectJsonReader(text).root_namespace() if text is not None else None
        if root_namespace is None:
            return None
        return self.full_namespace(root_namespace, manifest.parent)

    def root_path(self) -> Path:
        """Directory the path-only fallback counts segments from."""
        for pattern in (CSPROJ_PATTERN, PROJECT_JSON):
            found = find_up(pattern, self.directory)
            if found is not None:
                return found.parent.parent
        if self.workspace_root is not None:
            return self.workspace_root
        return Path(self.directory.anchor or os.sep)

    def from_file_path(self) -> str:
        return self.full_namespace("", self.root_path())[1:]

    def full_namespace(self, root_namespace: str, root_directory: Path) -> str:
        """Append one ``.segment`` per directory below *root_directory*.

        Segments are taken by position: everything in the target directory
        past the depth of *root_directory*.
        """
        segments = self.directory.parts[len(root_directory.parts):]
        return root_namespace + "".join(f".{segment}" for segment in segments)
