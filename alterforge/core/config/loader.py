"""
Configuration loader — reads alterforge.yml into a Settings model.

The file is optional. It is searched from the working directory upward,
so commands run inside a service directory still pick up the project's
defaults. ``ALTERFORGE_CONFIG`` points at an explicit file instead.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from alterforge.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "alterforge.yml"
CONFIG_ENV_VAR = "ALTERFORGE_CONFIG"


class ConfigError(Exception):
    """Raised when alterforge.yml is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for alterforge.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to alterforge.yml, or None if not found.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit)

    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None, *, start_dir: Path | None = None) -> Settings:
    """Load and validate scaffolder settings.

    Args:
        path: Explicit path to alterforge.yml. If None, searches upward.
        start_dir: Where the upward search begins (default: cwd).

    Returns:
        Validated Settings; defaults when no file is found.

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    if path is None:
        path = find_config_file(start_dir)

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
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
