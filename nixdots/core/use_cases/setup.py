"""
Setup use case — scaffold the dotfiles repository.

Flow:
    ensure dir → git init (+README) → probe home-manager
        → present:            home-manager c.nix
        → absent, install ok: home-manager c.nix
        → absent otherwise:   fallback c.nix + placeholder h.nix
    → modules/ → re-probe → main h.nix → fragments, sync.sh, .gitignore, nixdots.yml

Every file is rewritten on each run except README.md, which is only
written together with ``git init``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from nixdots.adapters.registry import AdapterRegistry, build_registry
from nixdots.core.models.action import Action
from nixdots.core.models.settings import Settings
from nixdots.core.models.template import GeneratedFile
from nixdots.core.services.generators.home_config import (
    generate_home_config,
    generate_home_placeholder,
)
from nixdots.core.services.generators.modules import MODULES_DIR, generate_modules
from nixdots.core.services.generators.repo_files import (
    generate_gitignore,
    generate_readme,
    generate_settings_file,
    generate_sync_script,
)
from nixdots.core.services.generators.system_config import generate_system_config
from nixdots.core.services.home_manager import check_home_manager, install_home_manager

logger = logging.getLogger(__name__)

# Called as progress(kind, message); kind is "step", "ok", "warn" or "info"
Progress = Callable[[str, str], None]


class _StepFailed(Exception):
    """An adapter step failed; setup cannot continue."""


@dataclass
class SetupResult:
    """Outcome of scaffolding the dotfiles repository."""

    ok: bool = False
    dotfiles_dir: Path | None = None
    variant: str = ""                       # "home-manager" | "fallback"
    home_manager_available: bool = False
    install_attempted: bool = False
    git_initialized: bool = False
    files_written: list[str] = field(default_factory=list)
    error: str | None = None
    hints: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "dotfiles_dir": str(self.dotfiles_dir) if self.dotfiles_dir else None,
            "variant": self.variant,
            "home_manager_available": self.home_manager_available,
            "install_attempted": self.install_attempted,
            "git_initialized": self.git_initialized,
            "files_written": self.files_written,
            "error": self.error,
            "hints": self.hints,
        }


def run_setup(
    settings: Settings,
    registry: AdapterRegistry | None = None,
    confirm_install: Callable[[], bool] | None = None,
    progress: Progress | None = None,
) -> SetupResult:
    """Scaffold the dotfiles repository described by ``settings``.

    Args:
        settings: Personalisation values and target directory.
        registry: Adapter registry (default: the real adapters).
        confirm_install: Asked when home-manager is missing; return True
            to install the channel. None means "don't install".
        progress: Optional callback for progress lines.

    Returns:
        SetupResult; ``ok`` is False and ``error`` set if a step failed.
    """
    registry = registry or build_registry()
    say = progress or (lambda kind, message: None)
    root = settings.dotfiles_path
    result = SetupResult(dotfiles_dir=root)

    try:
        _mkdir(registry, root)

        if not (root / ".git").is_dir():
            _run(registry, root, Action(
                id="git-init",
                name="Initialising git repository",
                adapter="git",
                params={"operation": "init"},
            ))
            _write(registry, root, generate_readme(settings), result)
            result.git_initialized = True

        if check_home_manager(registry):
            say("ok", "Home Manager found! Creating full configuration...")
            use_home_manager = True
        else:
            say("warn", "Home Manager not found in NIX_PATH")
            use_home_manager = False
            if confirm_install is not None and confirm_install():
                result.install_attempted = True
                say("step", "Installing Home Manager channel...")
                if install_home_manager(registry, settings):
                    say("ok", "Home Manager installed successfully!")
                    use_home_manager = True
                else:
                    say("warn", "Failed to install Home Manager. Using fallback configuration.")
            else:
                say("info", "Skipping Home Manager installation. Using fallback configuration.")

        _write(registry, root, generate_system_config(settings, home_manager=use_home_manager), result)
        if not use_home_manager:
            _write(registry, root, generate_home_placeholder(settings), result)
            result.hints.append(f"To enable Home Manager later, run: {settings.channel_hint()}")
        result.variant = "home-manager" if use_home_manager else "fallback"

        _mkdir(registry, root / MODULES_DIR)

        # The capability may have changed since the first probe
        result.home_manager_available = check_home_manager(registry)
        if result.home_manager_available:
            _write(registry, root, generate_home_config(settings), result)

        for generated in (
            *generate_modules(),
            generate_sync_script(),
            generate_gitignore(),
            generate_settings_file(settings),
        ):
            _write(registry, root, generated, result)

    except _StepFailed as e:
        result.error = str(e)
        return result

    logger.info("Setup complete in %s (%s variant)", root, result.variant)
    result.ok = True
    return result


def _run(registry: AdapterRegistry, root: Path, action: Action) -> None:
    receipt = registry.execute_action(action, working_dir=str(root))
    if receipt.failed:
        raise _StepFailed(f"{action.name or action.id} failed: {receipt.error}")


def _mkdir(registry: AdapterRegistry, path: Path) -> None:
    _run(registry, path.parent, Action(
        id=f"mkdir:{path.name}",
        name=f"Creating {path}",
        adapter="filesystem",
        params={"operation": "mkdir", "path": str(path)},
    ))


def _write(
    registry: AdapterRegistry,
    root: Path,
    generated: GeneratedFile,
    result: SetupResult,
) -> None:
    _run(registry, root, Action(
        id=f"write:{generated.path}",
        name=f"Writing {generated.path}",
        adapter="filesystem",
        params={
            "operation": "write",
            "path": generated.path,
            "content": generated.content,
            "executable": generated.executable,
        },
    ))
    if generated.path not in result.files_written:
        result.files_written.append(generated.path)
