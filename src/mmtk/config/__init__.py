"""Configuration management.

Configuration comes from MMTK_* environment variables over built-in
defaults; CLI flags override both.
"""

from mmtk.config.env import EnvReader
from mmtk.config.loader import build_logging_config, load_config
from mmtk.config.models import (
    DefaultsConfig,
    LoggingConfig,
    ToolkitConfig,
    ToolPathsConfig,
)

__all__ = [
    "DefaultsConfig",
    "EnvReader",
    "LoggingConfig",
    "ToolkitConfig",
    "ToolPathsConfig",
    "build_logging_config",
    "load_config",
]
