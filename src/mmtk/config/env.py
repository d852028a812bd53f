"""Environment variable reader with dependency injection support.

EnvReader reads and parses environment variables with type conversion.
It accepts an optional env mapping so configuration can be tested
without touching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class EnvReader:
    """Environment variable reader with type conversion and validation.

    Invalid values fall back to the default and log a warning.

    Example:
        reader = EnvReader(env={"MMTK_MAX_JOBS": "4"})
        jobs = reader.get_int("MMTK_MAX_JOBS", 2)  # Returns 4
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        value = self._env.get(var)
        if value is None or not value.strip():
            return default
        return value.strip()

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Get an integer, or default if unset or unparseable."""
        value = self._env.get(var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean.

        "true", "1", "yes" and "on" (any case) are true; any other set
        value is false.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value.strip().lower() in ("true", "1", "yes", "on")

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Get a path with tilde expansion. Existence is not checked."""
        value = self.get_str(var)
        if value is None:
            return default
        return Path(value).expanduser()

    def get_choice(
        self, var: str, choices: tuple[str, ...], default: str
    ) -> str:
        """Get a value restricted to choices (case-insensitive)."""
        value = self.get_str(var)
        if value is None:
            return default
        if value.casefold() not in choices:
            logger.warning(
                "Invalid value for %s: %s (expected one of %s)",
                var,
                value,
                ", ".join(choices),
            )
            return default
        return value.casefold()
