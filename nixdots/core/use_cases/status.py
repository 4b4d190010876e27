"""
Status use case — what setup has produced and what the system can do.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from nixdots.adapters.registry import AdapterRegistry, build_registry
from nixdots.core.models.settings import Settings
from nixdots.core.services.generators.home_config import HOME_CONFIG_FILE
from nixdots.core.services.generators.modules import MODULE_NAMES, MODULES_DIR
from nixdots.core.services.generators.repo_files import (
    HARDWARE_CONFIG_FILE,
    SYNC_SCRIPT_FILE,
)
from nixdots.core.services.generators.system_config import (
    SYSTEM_CONFIG_FILE,
    detect_variant,
)
from nixdots.core.services.home_manager import check_home_manager

EXPECTED_FILES = (
    SYSTEM_CONFIG_FILE,
    HOME_CONFIG_FILE,
    SYNC_SCRIPT_FILE,
    ".gitignore",
    HARDWARE_CONFIG_FILE,
    *(f"{MODULES_DIR}/{name}.nix" for name in MODULE_NAMES),
)


@dataclass
class StatusResult:
    """Snapshot of the dotfiles directory."""

    dotfiles_dir: Path | None = None
    exists: bool = False
    git_initialized: bool = False
    variant: str = "missing"
    home_manager_available: bool = False
    files: dict[str, bool] = field(default_factory=dict)

    @property
    def missing_files(self) -> list[str]:
        return [name for name, present in self.files.items() if not present]

    def to_dict(self) -> dict:
        return {
            "dotfiles_dir": str(self.dotfiles_dir) if self.dotfiles_dir else None,
            "exists": self.exists,
            "git_initialized": self.git_initialized,
            "variant": self.variant,
            "home_manager_available": self.home_manager_available,
            "files": self.files,
            "missing": self.missing_files,
        }


def get_status(settings: Settings, registry: AdapterRegistry | None = None) -> StatusResult:
    """Inspect the dotfiles directory and probe for home-manager."""
    registry = registry or build_registry()
    root = settings.dotfiles_path
    result = StatusResult(dotfiles_dir=root, exists=root.is_dir())

    result.home_manager_available = check_home_manager(registry)
    if not result.exists:
        return result

    result.git_initialized = (root / ".git").is_dir()
    result.files = {name: (root / name).is_file() for name in EXPECTED_FILES}

    system_config = root / SYSTEM_CONFIG_FILE
    content = system_config.read_text(encoding="utf-8") if system_config.is_file() else None
    result.variant = detect_variant(content)
    return result
