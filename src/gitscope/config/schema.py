"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Literal

OutputFormat = Literal["terminal", "json", "yaml"]
OUTPUT_FORMATS = ("terminal", "json", "yaml")

LogLevel = Literal["debug", "info", "warning", "error"]
LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class GitConfig:
    executable: str = "git"
    remote: str = "origin"  # remote used for ahead/behind, repo info and push


@dataclass
class DiffConfig:
    binary_extensions: List[str] = field(default_factory=list)  # added to the built-in list
    sniff_bytes: int = 512  # bytes checked for NUL when deciding binary


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class LoggingConfig:
    level: LogLevel = "warning"

    @property
    def level_no(self) -> int:
        return LOG_LEVELS.get(self.level, logging.WARNING)


@dataclass
class GitScopeConfig:
    version: str = "1.0"
    git: GitConfig = field(default_factory=GitConfig)
    diff: DiffConfig = field(default_factory=DiffConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
