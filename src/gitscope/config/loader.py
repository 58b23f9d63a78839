"""Load and merge configuration from .gitscope.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from gitscope.config.schema import (
    LOG_LEVELS,
    OUTPUT_FORMATS,
    DiffConfig,
    GitConfig,
    GitScopeConfig,
    LoggingConfig,
    OutputConfig,
)

CONFIG_FILENAME = ".gitscope.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(start: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence.

    Otherwise walks up from *start* and returns the first ``.gitscope.toml``.
    """
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    start = start if start.is_dir() else start.parent
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: GitScopeConfig) -> None:
    """Apply GITSCOPE_* environment variable overrides."""
    if val := os.environ.get("GITSCOPE_GIT"):
        cfg.git.executable = val
    if val := os.environ.get("GITSCOPE_REMOTE"):
        cfg.git.remote = val
    if val := os.environ.get("GITSCOPE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("GITSCOPE_LOG_LEVEL"):
        if val.lower() in LOG_LEVELS:
            cfg.logging.level = val.lower()  # type: ignore[assignment]
    if val := os.environ.get("GITSCOPE_BINARY_EXTENSIONS"):
        cfg.diff.binary_extensions.extend(e.strip() for e in val.split(",") if e.strip())


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: GitScopeConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        expected = ", ".join(OUTPUT_FORMATS)
        raise ConfigError(f"Invalid output format {cfg.output.format!r}; expected one of {expected}")
    if cfg.logging.level not in LOG_LEVELS:
        raise ConfigError(f"Invalid log level {cfg.logging.level!r}")
    if not isinstance(cfg.diff.sniff_bytes, int) or cfg.diff.sniff_bytes <= 0:
        raise ConfigError("diff.sniff_bytes must be a positive integer")
    if not isinstance(cfg.diff.binary_extensions, list):
        raise ConfigError("diff.binary_extensions must be a list")


def load_config(
    start: Path,
    config_override: Optional[str] = None,
) -> GitScopeConfig:
    """Load, validate, and return a GitScopeConfig."""
    config_path = find_config_file(start, config_override)

    if config_path is None:
        cfg = GitScopeConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = GitScopeConfig(
            version=raw.get("version", "1.0"),
            git=_build_section(raw, GitConfig, "git"),
            diff=_build_section(raw, DiffConfig, "diff"),
            output=_build_section(raw, OutputConfig, "output"),
            logging=_build_section(raw, LoggingConfig, "logging"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
