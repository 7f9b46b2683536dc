"""Configuration file adapter: [tool.policyspec] in pyproject.toml.

Example:
    [tool.policyspec]
    duplicate_sections = "merge"
    strict_keys = true
    comment_markers = ["#"]

A missing file or a file without the table yields default configuration.
Anything present but invalid raises ConfigError.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TypeAlias

from policyspec.domain.exceptions import ConfigError
from policyspec.domain.model.configuration import PolicySpecConfig
from policyspec.domain.model.enums import DuplicateSectionPolicy

DEFAULT_CONFIG_NAME = "pyproject.toml"
TOOL_TABLE = "policyspec"

TomlTable: TypeAlias = dict[str, object]

logger = logging.getLogger(__name__)

_KNOWN_OPTIONS = frozenset({"duplicate_sections", "strict_keys", "comment_markers"})


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(str(path), f"invalid TOML: {exc}") from exc
    return data


def tool_table(path: Path) -> TomlTable:
    """The [tool.policyspec] table of a TOML file, {} when absent."""
    data = _load_toml(path)
    tool = data.get("tool", {})
    section = tool.get(TOOL_TABLE, {}) if isinstance(tool, dict) else {}
    if not isinstance(section, dict):
        raise ConfigError(f"tool.{TOOL_TABLE}", "must be a table")
    return section


def config_from_table(table: TomlTable) -> PolicySpecConfig:
    """Build configuration from a parsed [tool.policyspec] table.

    Raises:
        ConfigError: Unknown option or invalid value.
    """
    unknown = sorted(set(table) - _KNOWN_OPTIONS)
    if unknown:
        raise ConfigError(unknown[0], f"unknown option (known: {', '.join(sorted(_KNOWN_OPTIONS))})")

    options: dict[str, object] = {}

    if "duplicate_sections" in table:
        raw = table["duplicate_sections"]
        try:
            options["duplicate_sections"] = DuplicateSectionPolicy(raw)
        except ValueError:
            allowed = ", ".join(p.value for p in DuplicateSectionPolicy)
            raise ConfigError("duplicate_sections", f"expected one of {allowed}, got {raw!r}") from None

    if "strict_keys" in table:
        raw = table["strict_keys"]
        if not isinstance(raw, bool):
            raise ConfigError("strict_keys", f"expected boolean, got {type(raw).__name__}")
        options["strict_keys"] = raw

    if "comment_markers" in table:
        raw = table["comment_markers"]
        if not isinstance(raw, list) or not all(isinstance(m, str) for m in raw):
            raise ConfigError("comment_markers", "expected a list of strings")
        options["comment_markers"] = tuple(raw)

    return PolicySpecConfig(**options)  # type: ignore[arg-type]


def load_config(root: Path | None = None, config_path: Path | None = None) -> PolicySpecConfig:
    """Load configuration from pyproject.toml.

    Args:
        root: Directory holding pyproject.toml. None = current directory.
        config_path: Explicit TOML file, overrides root. Must exist.

    Returns:
        Configuration (defaults for anything not set).

    Raises:
        ConfigError: Invalid TOML, unknown option or invalid value.
    """
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    elif not config_path.is_file():
        raise ConfigError(str(config_path), "config file does not exist")
    table = tool_table(config_path)
    logger.debug("config from %s: %s", config_path, table or "defaults")
    return config_from_table(table)
