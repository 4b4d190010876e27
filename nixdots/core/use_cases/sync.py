"""
Sync use case — install the dotfiles into the system config and rebuild.

Flow:
    hardware-configuration.nix in → sudo cp c.nix (h.nix, hardware) out
    → check (home-manager present? configuration evaluates?)
    → --check: stop | --force: rebuild | otherwise: ask
    → --force without --silent: auto-commit

Each failure stops the flow and sets ``error``; the CLI maps that to
exit code 1.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from nixdots.adapters.registry import AdapterRegistry, build_registry
from nixdots.core.models.action import Action
from nixdots.core.models.settings import Settings
from nixdots.core.services.generators.home_config import HOME_CONFIG_FILE
from nixdots.core.services.generators.repo_files import HARDWARE_CONFIG_FILE
from nixdots.core.services.generators.system_config import (
    HOME_CONFIG_IMPORT,
    SYSTEM_CONFIG_FILE,
)
from nixdots.core.services.home_manager import check_home_manager

logger = logging.getLogger(__name__)

SYSTEM_CONFIG_TARGET = "configuration.nix"

# Called as progress(kind, message); kind is "step", "ok", "warn" or "info"
Progress = Callable[[str, str], None]


@dataclass
class SyncResult:
    """Outcome of a sync run."""

    ok: bool = False
    stage: str = ""                 # last stage reached: prepare, copy, check, rebuild, commit
    synced_files: list[str] = field(default_factory=list)
    checked: bool = False
    rebuilt: bool = False
    committed: bool = False
    error: str | None = None
    details: list[str] = field(default_factory=list)
    hints: list[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "stage": self.stage,
            "synced_files": self.synced_files,
            "checked": self.checked,
            "rebuilt": self.rebuilt,
            "committed": self.committed,
            "error": self.error,
            "details": self.details,
            "hints": self.hints,
        }


def _now() -> str:
    return datetime.now().strftime("%H:%M:%S")


def run_sync(
    settings: Settings,
    registry: AdapterRegistry | None = None,
    force: bool = False,
    silent: bool = False,
    check_only: bool = False,
    confirm_rebuild: Callable[[], bool] | None = None,
    progress: Progress | None = None,
) -> SyncResult:
    """Sync the dotfiles into the system configuration directory.

    Args:
        settings: Where the dotfiles and the system config live.
        registry: Adapter registry (default: the real adapters).
        force: Rebuild without asking, then auto-commit.
        silent: Suppress progress lines. Warnings, the check-only result and
            the outcome of the rebuild prompt are still reported.
        check_only: Stop after the configuration check.
        confirm_rebuild: Asked when not forcing; None means "don't rebuild".
        progress: Optional callback for progress lines.
    """
    registry = registry or build_registry()
    root = settings.dotfiles_path
    system_dir = settings.system_path
    result = SyncResult(stage="prepare")

    def say(kind: str, message: str) -> None:
        if progress is not None and (not silent or kind == "warn"):
            progress(kind, message)

    def tell(kind: str, message: str) -> None:
        # Shown even when silent
        if progress is not None:
            progress(kind, message)

    say("step", f"[{_now()}] Syncing NixOS configuration...")

    if not root.is_dir():
        result.error = f"{settings.dotfiles_dir} directory not found! Run the setup script first."
        result.hints.append("nixdots setup")
        return result

    # ── Hardware configuration ───────────────────────────────────
    local_hw = root / HARDWARE_CONFIG_FILE
    if not local_hw.exists():
        system_hw = system_dir / HARDWARE_CONFIG_FILE
        if system_hw.exists():
            receipt = registry.execute_action(
                Action(
                    id="copy-hardware-config",
                    name=f"Copying {HARDWARE_CONFIG_FILE} into the dotfiles",
                    adapter="filesystem",
                    params={"operation": "copy", "source": str(system_hw), "path": str(local_hw)},
                ),
                working_dir=str(root),
            )
            if receipt.failed:
                result.error = f"Cannot copy {system_hw}: {receipt.error}"
                return result
            say("ok", f"Copied {HARDWARE_CONFIG_FILE}")
        else:
            say("warn", f"Warning: No {HARDWARE_CONFIG_FILE} found in {system_dir}/")
            say("warn", "You may need to generate it with: sudo nixos-generate-config")

    system_config = root / SYSTEM_CONFIG_FILE
    if not system_config.is_file():
        result.error = f"Configuration file {SYSTEM_CONFIG_FILE} not found!"
        result.hints.append("nixdots setup")
        return result
    config_text = system_config.read_text(encoding="utf-8")

    # ── Copy into the system config directory ────────────────────
    result.stage = "copy"
    copies = [(system_config, system_dir / SYSTEM_CONFIG_TARGET)]
    if HOME_CONFIG_IMPORT in config_text:
        copies.append((root / HOME_CONFIG_FILE, system_dir / HOME_CONFIG_FILE))
    if local_hw.exists():
        copies.append((local_hw, system_dir / HARDWARE_CONFIG_FILE))

    for source, target in copies:
        receipt = registry.execute_action(
            Action(
                id=f"install:{source.name}",
                name=f"Installing {source.name} as {target}",
                adapter="shell",
                privileged=True,
                params={"command": ["cp", str(source), str(target)]},
            ),
            working_dir=str(root),
        )
        if receipt.failed:
            result.error = f"Failed to copy {source.name} to {target}: {receipt.error}"
            return result
        result.synced_files.append(source.name)

    say("ok", "Configuration files synced!")

    # ── Check ────────────────────────────────────────────────────
    result.stage = "check"
    if not _check_config(registry, settings, config_text, result, say):
        result.error = "Configuration check failed. Aborting rebuild."
        return result
    result.checked = True

    if check_only:
        tell("ok", "Configuration check completed successfully!")
        result.ok = True
        return result

    # ── Rebuild ──────────────────────────────────────────────────
    result.stage = "rebuild"
    if force:
        say("step", f"[{_now()}] Force rebuilding system...")
        if not _rebuild(registry, root, result):
            return result
        say("ok", f"[{_now()}] System rebuilt successfully!")
        say("ok", "Ready to grind! Your NixOS is updated.")
    elif confirm_rebuild is not None and confirm_rebuild():
        tell("step", "Rebuilding system...")
        if not _rebuild(registry, root, result):
            return result
        tell("ok", "System rebuilt successfully!")
    else:
        tell("info", "Skipping rebuild. Run 'sudo nixos-rebuild switch' manually when ready.")

    # ── Auto-commit ──────────────────────────────────────────────
    if (root / ".git").is_dir() and force and not silent:
        result.stage = "commit"
        say("info", "Auto-committing changes...")
        receipt = registry.execute_action(
            Action(
                id="git-commit",
                name="Committing dotfiles",
                adapter="git",
                params={
                    "operation": "commit",
                    "message": f"Auto-update: {datetime.now():%Y-%m-%d %H:%M}",
                },
            ),
            working_dir=str(root),
        )
        if receipt.ok:
            result.committed = True
        else:
            if receipt.failed:
                logger.debug("git commit failed: %s", receipt.error)
            say("info", "Nothing to commit")

    result.ok = True
    return result


def _check_config(
    registry: AdapterRegistry,
    settings: Settings,
    config_text: str,
    result: SyncResult,
    say: Progress,
) -> bool:
    """Home-manager availability, then a full evaluation of the synced config."""
    say("step", "Checking configuration syntax...")

    if "home-manager/nixos" in config_text and not check_home_manager(registry):
        result.details.append("Error: Configuration uses Home Manager but it's not installed!")
        result.hints.append(
            f"Run: sudo nix-channel --add {settings.channel_url} {settings.channel_name}"
        )
        result.hints.append("Then: sudo nix-channel --update")
        return False

    receipt = registry.execute_action(
        Action(
            id="evaluate-configuration",
            name="Evaluating system configuration",
            adapter="nix",
            privileged=True,
            params={
                "operation": "evaluate",
                "config": str(settings.system_path / SYSTEM_CONFIG_TARGET),
                "timeout": 600,
            },
        ),
        working_dir=str(settings.dotfiles_path),
    )
    if receipt.failed:
        logger.info("Evaluation output: %s", receipt.error)
        result.details.append("Configuration syntax error detected!")
        result.hints.append("Check your configuration files for syntax errors")
        result.hints.append("For detailed errors: sudo nixos-rebuild switch --show-trace")
        return False

    say("ok", "Configuration syntax is valid!")
    return True


def _rebuild(registry: AdapterRegistry, root: Path, result: SyncResult) -> bool:
    receipt = registry.execute_action(
        Action(
            id="rebuild",
            name="nixos-rebuild switch",
            adapter="nix",
            privileged=True,
            params={"operation": "rebuild", "mode": "switch"},
        ),
        working_dir=str(root),
    )
    if receipt.failed:
        result.error = "Rebuild failed! Check the error messages above."
        return False
    result.rebuilt = True
    return True
