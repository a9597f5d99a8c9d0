"""Legacy ``project.json`` manifests (pre-MSBuild .NET Core)."""

from __future__ import annotations

import json
import logging

log = logging.getLogger(__name__)


class ProjectJsonReader:
    def __init__(self, text: str):
        self.text = text

    def root_namespace(self) -> str | None:
        """Return ``tooling.defaultNamespace``, or None when absent or unparseable."""
        try:
            data = json.loads(self.text)
        except json.JSONDecodeError as exc:
            log.debug("cannot parse project.json: %s", exc)
            return None
        tooling = data.get("tooling") if isinstance(data, dict) else None
        if not isinstance(tooling, dict):
            return None
        namespace = tooling.get("defaultNamespace")
        return namespace if isinstance(namespace, str) else None
