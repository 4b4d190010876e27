"""
Repository file generators — .gitignore, README.md, sync.sh, nixdots.yml.
"""

from __future__ import annotations

from nixdots.core.config.loader import SETTINGS_FILE, dump_settings
from nixdots.core.models.settings import Settings
from nixdots.core.models.template import GeneratedFile

SYNC_SCRIPT_FILE = "sync.sh"
HARDWARE_CONFIG_FILE = "hardware-configuration.nix"

_GITIGNORE = f"""\
{HARDWARE_CONFIG_FILE}
result
*.swp
*.swo
*~
"""

_SYNC_SCRIPT = """\
#!/usr/bin/env bash
# Sync helper for the NixOS dotfiles workflow
# Usage: ./sync.sh [--force] [--silent] [--check]
#
#   --check   only check configuration syntax
#   --force   rebuild without prompting (and auto-commit)
#   --silent  run quietly

set -e

cd "$(dirname "$(readlink -f "$0")")"
exec nixdots sync "$@"
"""


def generate_gitignore() -> GeneratedFile:
    """Ignore machine-specific and editor files."""
    return GeneratedFile(path=".gitignore", content=_GITIGNORE, reason="Ignore list")


def generate_readme(settings: Settings) -> GeneratedFile:
    """Two-line README written when the repository is first created."""
    name = settings.dotfiles_path.name
    title = name[:1].upper() + name[1:]
    content = (
        f"# {title} - Personal NixOS Configuration\n"
        "My personalized NixOS setup with Home Manager\n"
    )
    return GeneratedFile(path="README.md", content=content, reason="Repository README")


def generate_sync_script() -> GeneratedFile:
    """Executable launcher that runs ``nixdots sync`` from the dotfiles dir."""
    return GeneratedFile(
        path=SYNC_SCRIPT_FILE,
        content=_SYNC_SCRIPT,
        executable=True,
        reason="Sync helper (--force, --silent, --check)",
    )


def generate_settings_file(settings: Settings) -> GeneratedFile:
    """Record the settings used so later sync runs pick them up."""
    return GeneratedFile(
        path=SETTINGS_FILE,
        content=dump_settings(settings),
        reason="Settings used by setup",
    )
