"""
Config check use case — validate nixdots.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from nixdots.core.config.loader import ConfigError, find_settings_file, load_settings
from nixdots.core.models.settings import PLACEHOLDER_EMAIL, Settings


@dataclass
class ConfigCheckResult:
    """Result of settings validation."""

    valid: bool = False
    settings: Settings | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "username": self.settings.username if self.settings else None,
            "dotfiles_dir": self.settings.dotfiles_dir if self.settings else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate settings and report issues.

    A missing nixdots.yml is not an error: the defaults are checked
    instead, with a warning.

    Args:
        config_path: Optional explicit path to nixdots.yml.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_settings_file()
    result.config_path = config_path

    if config_path is None:
        result.warnings.append("No nixdots.yml found. Using built-in defaults.")

    try:
        settings = load_settings(config_path)
        result.settings = settings
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Semantic checks (warnings only; schema problems are already errors)
    if not settings.hostname_valid:
        result.warnings.append(f"Invalid hostname: '{settings.hostname}'")

    if settings.git_email == PLACEHOLDER_EMAIL:
        result.warnings.append(
            f"git_email is still the placeholder '{PLACEHOLDER_EMAIL}'."
        )

    if not settings.dotfiles_path.is_dir():
        result.warnings.append(
            f"Dotfiles directory does not exist yet: {settings.dotfiles_dir}. Run 'nixdots setup'."
        )

    if not settings.system_path.is_dir():
        result.warnings.append(f"System config directory not found: {settings.system_config_dir}")

    result.valid = len(result.errors) == 0
    return result
