"""Runtime configuration model for Imageset.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

from core.constants import DATASETS_DIR_NAME, DEFAULT_DATA_ROOT, DEFAULT_LOG_LEVEL
from core.errors import ImagesetConfigError

_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


@dataclass(frozen=True)
class ImagesetConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory holding the datasets folder.
        cache_enabled: Whether dataset managers cache read results.
        log_level: Stdlib log level name used by the CLI.
    """

    data_root: Path
    cache_enabled: bool
    log_level: str

    @property
    def datasets_dir(self) -> Path:
        """Directory where named dataset files live."""
        return self.data_root / DATASETS_DIR_NAME

    @classmethod
    def from_env(cls) -> "ImagesetConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ImagesetConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("IMAGESET_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        cache_value = os.getenv("IMAGESET_CACHE_ENABLED", "true")
        log_level_value = os.getenv("IMAGESET_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            cache_enabled=_parse_bool("IMAGESET_CACHE_ENABLED", cache_value),
            log_level=_parse_log_level(log_level_value),
        )


def _parse_bool(name: str, raw_value: str) -> bool:
    """Parse a boolean environment value.

    Args:
        name: Environment variable name, used in error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed boolean.

    Raises:
        ImagesetConfigError: If value is not a recognized boolean word.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_WORDS:
        return True
    if normalized in _FALSE_WORDS:
        return False
    raise ImagesetConfigError(
        f"Invalid {name} value: expected one of "
        f"{', '.join(_TRUE_WORDS + _FALSE_WORDS)}, got '{raw_value}'."
    )


def _parse_log_level(raw_value: str) -> str:
    """Validate a stdlib log level name.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Upper-cased level name.

    Raises:
        ImagesetConfigError: If the level name is unknown.
    """
    level_name = raw_value.strip().upper()
    if not isinstance(logging.getLevelName(level_name), int):
        raise ImagesetConfigError(
            f"Invalid IMAGESET_LOG_LEVEL value: got '{raw_value}'. "
            "Use DEBUG, INFO, WARNING, or ERROR."
        )
    return level_name
