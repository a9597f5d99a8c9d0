"""Per-project settings (.sharpkit/config.json) with environment overrides.

Resolution order for every setting (first match wins):

1. Explicit overrides passed by the caller (CLI options).
2. ``SHARPKIT_*`` environment variables.
3. ``<project root>/.sharpkit/config.json``.
4. Built-in defaults.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

log = logging.getLogger(__name__)

CONFIG_DIR = ".sharpkit"
CONFIG_NAME = "config.json"

_ENV_VARS = {
    "tab_size": "SHARPKIT_TAB_SIZE",
    "use_this_for_ctor_assignments": "SHARPKIT_USE_THIS",
    "private_member_prefix": "SHARPKIT_PRIVATE_MEMBER_PREFIX",
    "reformat_after_change": "SHARPKIT_REFORMAT",
}

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    tab_size: int = 4
    use_this_for_ctor_assignments: bool = True
    private_member_prefix: str = ""
    reformat_after_change: bool = True

    def indent(self, levels: int) -> str:
        return " " * (self.tab_size * levels)

    def to_dict(self) -> dict:
        return asdict(self)


SETTING_NAMES = tuple(f.name for f in fields(Settings))


def find_project_root(start: str = ".") -> Path:
    """Find the project root by looking for a .git directory."""
    current = Path(start).resolve()
    if current.is_file():
        current = current.parent
    origin = current
    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent
    return origin


def get_config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_NAME


def load_project_config(project_root: Path) -> dict:
    """Load .sharpkit/config.json if it exists.

    Returns an empty dict if the file is missing or malformed.
    """
    config_path = get_config_path(project_root)
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        log.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("ignoring config %s: expected a JSON object", config_path)
        return {}
    return data


def write_project_config(config: dict, project_root: Path) -> Path:
    """Write (or update) .sharpkit/config.json.

    Merges *config* into the existing config; keys mapped to None are
    removed.  Returns the path of the written file.
    """
    config_path = get_config_path(project_root)
    config_path.parent.mkdir(exist_ok=True)
    existing = load_project_config(project_root)
    for key, value in config.items():
        if value is None:
            existing.pop(key, None)
        else:
            existing[key] = value
    config_path.write_text(json.dumps(existing, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return config_path


def coerce_setting(name: str, value):
    """Convert a raw (string/JSON) value to the type of setting *name*.

    Raises ValueError for unknown names or unconvertible values.
    """
    if name not in SETTING_NAMES:
        raise ValueError(f"unknown setting: {name}")
    default = getattr(Settings(), name)
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"{name} expects a boolean, got {value!r}")
    if isinstance(default, int):
        if isinstance(value, bool):
            raise ValueError(f"{name} expects an integer, got {value!r}")
        number = int(value)
        if number < 1 or number > 16:
            raise ValueError(f"{name} must be between 1 and 16, got {number}")
        return number
    return "" if value is None else str(value)


def load_settings(start: str = ".", overrides: dict | None = None) -> Settings:
    """Build Settings for the project containing *start*."""
    values: dict = {}
    file_config = load_project_config(find_project_root(start))
    layers = [
        ("config file", file_config),
        ("environment", {name: os.environ[var] for name, var in _ENV_VARS.items() if var in os.environ}),
        ("override", {k: v for k, v in (overrides or {}).items() if v is not None}),
    ]
    for source, layer in layers:
        for name, raw in layer.items():
            if name not in SETTING_NAMES:
                log.debug("ignoring unknown setting %r from %s", name, source)
                continue
            try:
                values[name] = coerce_setting(name, raw)
            except ValueError as exc:
                log.warning("ignoring %s setting: %s", source, exc)
    return replace(Settings(), **values)
