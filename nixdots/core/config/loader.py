"""
Configuration loader — reads nixdots.yml into a Settings model.

This is the primary entry point for loading personalisation values.
It reads YAML, validates against the Pydantic schema, and returns
a typed Settings object. Without a file, the stock defaults apply.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from nixdots.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "nixdots.yml"


class ConfigError(Exception):
    """Raised when the settings file is invalid or unreadable."""


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for nixdots.yml starting from the given directory, walking up.

    This lets ``sync.sh`` (which changes into the dotfiles directory)
    pick up the settings recorded there by ``setup``.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to nixdots.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit path to nixdots.yml. If None, searches upward and
            falls back to defaults when nothing is found.

    Returns:
        Validated Settings model.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_settings_file()
        if path is None:
            logger.debug("No %s found, using defaults", SETTINGS_FILE)
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

    # The YAML may wrap everything under a "nixdots" key or be flat
    if isinstance(data.get("nixdots"), dict):
        data = data["nixdots"]

    # A relative dotfiles_dir is relative to the file, not to the cwd
    dotfiles_dir = data.get("dotfiles_dir")
    if isinstance(dotfiles_dir, str) and dotfiles_dir:
        expanded = Path(dotfiles_dir).expanduser()
        if not expanded.is_absolute():
            data = {**data, "dotfiles_dir": str(path.parent.resolve() / expanded)}

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid settings: {e}") from e

    logger.info("Loaded settings for '%s' (dotfiles: %s)", settings.username, settings.dotfiles_dir)
    return settings


def dump_settings(settings: Settings) -> str:
    """Serialise settings back to the YAML layout ``load_settings`` reads."""
    header = "# nixdots settings, read by 'nixdots setup' and './sync.sh'\n"
    body = yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False)
    return header + body
