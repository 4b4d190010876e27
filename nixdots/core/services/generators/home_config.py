"""
Home configuration generator — produce h.nix.

The main h.nix imports every module fragment by absolute path. When
home-manager is not available a placeholder is written instead, telling
the user how to switch over later.
"""

from __future__ import annotations

from nixdots.core.models.settings import Settings
from nixdots.core.models.template import GeneratedFile
from nixdots.core.services.generators.modules import MODULE_NAMES

HOME_CONFIG_FILE = "h.nix"


def _module_imports(settings: Settings) -> str:
    modules_dir = settings.modules_path
    return "\n".join(f"    {modules_dir / name}.nix" for name in MODULE_NAMES)


def generate_home_config(settings: Settings) -> GeneratedFile:
    """Main home-manager configuration importing all module fragments."""
    s = settings
    content = f"""\
# Main Home Manager configuration
# This imports all your modular configurations
{{ config, pkgs, ... }}:
{{
  home.username = "{s.username}";
  home.homeDirectory = "/home/{s.username}";

  # Import all your modular configurations with absolute paths
  imports = [
{_module_imports(s)}
  ];

  # Basic packages that don't need special config
  home.packages = with pkgs; [
    # System utilities
    btop
    neofetch
    tree
    unzip
    p7zip
    curl
    wget
  ];

  # Git configuration (core identity)
  programs.git = {{
    enable = true;
    userName = "{s.username}";
    userEmail = "{s.git_email}";
  }};
}}
"""
    return GeneratedFile(
        path=HOME_CONFIG_FILE,
        content=content,
        reason="Home Manager configuration importing module fragments",
    )


def generate_home_placeholder(settings: Settings) -> GeneratedFile:
    """Unused h.nix left behind by the fallback variant."""
    s = settings
    content = f"""\
# This file is not being used in the current configuration
# Home Manager is not set up. User configs are in c.nix under environment.systemPackages
#
# To enable Home Manager later:
# 1. Make sure Home Manager is installed: sudo nix-channel --add {s.channel_url} {s.channel_name}
# 2. Update channels: sudo nix-channel --update
# 3. Re-run: nixdots setup
#
# For now, edit c.nix to add packages and configurations.
{{ config, pkgs, ... }}:
{{
}}
"""
    return GeneratedFile(
        path=HOME_CONFIG_FILE,
        content=content,
        reason="Placeholder: Home Manager not available",
    )
