"""
Editor settings.

Settings are a small YAML document; every key is optional:

    excluded_prefixes: [dc_]
    operation_name: Update Component Options
    refresh_dynamic_components: true
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List

import yaml


class ConfigError(ValueError):
    """Raised when a settings document is malformed."""
    pass


@dataclass
class EditorSettings:
    """
    Behaviour switches for projection and writing.

    Properties:
        excluded_prefixes:
            Dictionary name prefixes that are internal to the host.
            Matching dictionaries are never projected nor written.

        operation_name:
            Name of the undoable operation shown in the host's undo menu

        refresh_dynamic_components:
            Also ask an active Dynamic Components subsystem to redraw
            every instance after a successful write
    """

    excluded_prefixes: List[str] = field(default_factory=lambda: ["dc_"])
    operation_name: str = "Update Component Options"
    refresh_dynamic_components: bool = True

    def is_excluded(self, dictionary_name: str) -> bool:
        return any(dictionary_name.startswith(p) for p in self.excluded_prefixes)


def settings_to_dict(s: EditorSettings) -> Dict[str, Any]:
    return {
        "excluded_prefixes": list(s.excluded_prefixes),
        "operation_name": s.operation_name,
        "refresh_dynamic_components": s.refresh_dynamic_components,
    }


def settings_from_dict(d: Dict[str, Any] | None) -> EditorSettings:
    if d is None:
        return EditorSettings()
    if not isinstance(d, dict):
        raise ConfigError(f"Settings must be a mapping, got {type(d).__name__}")

    known = {f.name for f in fields(EditorSettings)}
    unknown = set(d) - known
    if unknown:
        raise ConfigError(f"Unknown settings: {sorted(unknown)}")

    settings = EditorSettings()
    if "excluded_prefixes" in d:
        prefixes = d["excluded_prefixes"]
        if not isinstance(prefixes, list) or not all(isinstance(p, str) and p for p in prefixes):
            raise ConfigError("excluded_prefixes must be a list of non-empty strings")
        settings.excluded_prefixes = list(prefixes)
    if "operation_name" in d:
        name = d["operation_name"]
        if not isinstance(name, str) or not name.strip():
            raise ConfigError("operation_name must be a non-empty string")
        settings.operation_name = name
    if "refresh_dynamic_components" in d:
        refresh = d["refresh_dynamic_components"]
        if not isinstance(refresh, bool):
            raise ConfigError("refresh_dynamic_components must be true or false")
        settings.refresh_dynamic_components = refresh
    return settings


def settings_to_yaml(s: EditorSettings) -> str:
    return yaml.safe_dump(settings_to_dict(s))


def settings_from_yaml(s: str) -> EditorSettings:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid settings YAML: {e}")
    return settings_from_dict(d)


def load_settings(filepath: str) -> EditorSettings:
    """Read settings from a YAML file."""
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Settings file not found: {filepath}")
    return settings_from_yaml(content)
