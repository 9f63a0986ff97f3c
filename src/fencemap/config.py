from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .directives import SKIP_DIRECTIVE
from .errors import ConfigError


DEFAULT_CONFIG_NAME = "pyproject.toml"

UNSATISFIABLE_RULES: frozenset[str] = frozenset(
    {
        "eol-last",  # the Markdown parser strips trailing newlines in code fences
        "unicode-bom",  # fragments begin in the middle of the document
    }
)


@dataclass(frozen=True, slots=True)
class FencemapConfig:
    unsatisfiable_rules: frozenset[str] = UNSATISFIABLE_RULES
    skip_directive: str = SKIP_DIRECTIVE
    languages: frozenset[str] | None = None  # None extracts every tagged fence

    def __post_init__(self) -> None:
        # Configured rules extend the fixed set, never replace it.
        rules = UNSATISFIABLE_RULES | frozenset(self.unsatisfiable_rules)
        object.__setattr__(self, "unsatisfiable_rules", rules)

    @classmethod
    def from_table(cls, table: dict[str, Any]) -> "FencemapConfig":
        extra = _string_list(table, "unsatisfiable-rules") or []
        languages = _string_list(table, "languages")
        skip = table.get("skip-directive", SKIP_DIRECTIVE)
        if not isinstance(skip, str) or not skip:
            raise ConfigError("[tool.fencemap] skip-directive must be a non-empty string")
        return cls(
            unsatisfiable_rules=frozenset(extra),
            skip_directive=skip,
            languages=frozenset(languages) if languages is not None else None,
        )

    def wants(self, tag: str) -> bool:
        return self.languages is None or tag in self.languages


def _string_list(table: dict[str, Any], key: str) -> list[str] | None:
    value = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError(f"[tool.fencemap] {key} must be a string or a list of strings")


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> FencemapConfig:
    """Read ``[tool.fencemap]`` from a pyproject file; missing parts use defaults."""
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    data = _load_toml(config_path)
    tool = data.get("tool")
    section = tool.get("fencemap", {}) if isinstance(tool, dict) else {}
    if not isinstance(section, dict):
        raise ConfigError("[tool.fencemap] must be a table")
    return FencemapConfig.from_table(section)
