"""Configuration loading, schema, and defaults."""

from gitscope.config.loader import ConfigError, find_config_file, load_config
from gitscope.config.schema import GitScopeConfig, OutputFormat

__all__ = [
    "ConfigError",
    "GitScopeConfig",
    "OutputFormat",
    "find_config_file",
    "load_config",
]
