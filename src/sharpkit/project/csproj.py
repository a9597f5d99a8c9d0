"""Read references and the root namespace from a ``.csproj`` file.

Both SDK-style projects and old-style projects (elements in the
``http://schemas.microsoft.com/developer/msbuild/2003`` namespace) are
accepted; XML namespaces are ignored when matching tags.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageReference:
    include: str
    version: str | None = None

    def to_dict(self) -> dict:
        return {"include": self.include, "version": self.version}


@dataclass(frozen=True)
class ProjectReference:
    include: str

    def to_dict(self) -> dict:
        return {"include": self.include}


def _local(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


class CsprojReader:
    """Lazy, read-only view over the text of one project file.

    Malformed XML never raises: reference lookups return ``[]`` and the
    root namespace lookup returns None.
    """

    def __init__(self, text: str):
        self.text = text
        self._root: ET.Element | None = None
        self._parsed = False

    def _project(self) -> ET.Element | None:
        if not self._parsed:
            self._parsed = True
            try:
                root = ET.fromstring(self.text)
            except ET.ParseError as exc:
                log.debug("cannot parse project xml: %s", exc)
                return None
            if _local(root.tag) == "Project":
                self._root = root
        return self._root

    def _item_group_entries(self, item_type: str) -> list[ET.Element]:
        project = self._project()
        if project is None:
            return []
        entries = []
        for group in _children(project, "ItemGroup"):
            entries.extend(e for e in _children(group, item_type) if e.get("Include"))
        return entries

    def package_refs(self) -> list[PackageReference]:
        refs = []
        for entry in self._item_group_entries("PackageReference"):
            version = entry.get("Version")
            if version is None:
                # <PackageReference Include="X"><Version>1.0</Version></PackageReference>
                nested = _children(entry, "Version")
                if nested and nested[0].text:
                    version = nested[0].text.strip()
            refs.append(PackageReference(entry.get("Include"), version))
        return refs

    def project_refs(self) -> list[ProjectReference]:
        return [ProjectReference(e.get("Include")) for e in self._item_group_entries("ProjectReference")]

    def root_namespace(self) -> str | None:
        """First ``PropertyGroup/RootNamespace`` in document order.

        None when there is none, or when the first one is empty.
        """
        project = self._project()
        if project is None:
            return None
        for group in _children(project, "PropertyGroup"):
            for element in _children(group, "RootNamespace"):
                return (element.text or "").strip() or None
        return None
