"""
Configuration loader — reads config.yml into the Settings model.

Lookup order:
    1. explicit path (--config)
    2. $MACSETUP_CONFIG
    3. ~/.config/macsetup/config.yml

An explicit path must exist. The default locations are optional: if
nothing is found, built-in defaults are used.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from macsetup.core.errors import MacSetupError
from macsetup.core.models.settings import Settings

logger = logging.getLogger(__name__)

CONFIG_ENV = "MACSETUP_CONFIG"
DEFAULT_CONFIG_PATH = Path(".config") / "macsetup" / "config.yml"   # relative to home


class ConfigError(MacSetupError):
    """Raised when the settings file is unreadable or invalid."""


def find_config_file(home: Path | None = None) -> Path | None:
    """Locate the settings file from the environment or the default path.

    Returns:
        Path to an existing config file, or None.
    """
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()

    candidate = (home or Path.home()) / DEFAULT_CONFIG_PATH
    if candidate.is_file():
        return candidate
    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit config path. If None, searches the default locations.

    Returns:
        Validated Settings model (defaults if no file was found).

    Raises:
        ConfigError: If an explicit file is missing or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No config file found, using defaults")
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
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings for user '%s' from %s", settings.user, path)
    return settings
