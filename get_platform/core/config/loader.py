"""
Configuration loader — reads getplatform.yml into Settings.

The file is optional. Without one every setting keeps its default
and resolution inspects the real host paths.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from get_platform.core.services.distro import OS_RELEASE_PATH

logger = logging.getLogger(__name__)

CONFIG_FILE = "getplatform.yml"
CONFIG_ENV_VAR = "GETPLATFORM_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration file is invalid or unreadable."""


class Settings(BaseModel):
    """Tunables for a resolution run."""

    model_config = ConfigDict(extra="forbid")

    os_release_path: Path = OS_RELEASE_PATH
    max_workers: int | None = Field(default=None, ge=1)
    openssl_binary: str = "openssl"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for getplatform.yml starting from the given directory, walking up."""
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from ``path``, ``$GETPLATFORM_CONFIG`` or an upward search.

    Raises:
        ConfigError: If an explicitly named file is missing, or any file is invalid.
    """
    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR])
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return Settings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
