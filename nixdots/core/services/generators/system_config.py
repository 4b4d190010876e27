"""
System configuration generator — produce c.nix.

Two variants, selected by whether home-manager resolves:

- home-manager: minimal system packages, user environment delegated to
  h.nix through ``<home-manager/nixos>``.
- fallback: no home-manager import; every user package, fish and the
  fonts live in ``environment.systemPackages``.
"""

from __future__ import annotations

from nixdots.core.models.settings import Settings
from nixdots.core.models.template import GeneratedFile

SYSTEM_CONFIG_FILE = "c.nix"

# Markers sync looks for in c.nix
HOME_MANAGER_IMPORT = "<home-manager/nixos>"
HOME_CONFIG_IMPORT = "import ./h.nix"


def _header(s: Settings) -> str:
    return f"""\
# Edit this file in {s.dotfiles_dir}/{SYSTEM_CONFIG_FILE}
# Run 'sudo nixos-rebuild switch' after changes
{{ config, pkgs, ... }}:
{{"""


def _boot_and_network(s: Settings) -> str:
    return f"""\
  # Bootloader
  boot.loader.systemd-boot.enable = true;
  boot.loader.efi.canTouchEfiVariables = true;

  # Network
  networking.hostName = "{s.hostname}";
  networking.networkmanager.enable = true;"""


_PORTAL_AND_AUDIO = """\
  # XDG Portal for Hyprland
  xdg.portal = {
    enable = true;
    extraPortals = [ pkgs.xdg-desktop-portal-hyprland ];
  };

  # Audio
  security.rtkit.enable = true;
  services.pipewire = {
    enable = true;
    alsa.enable = true;
    alsa.support32Bit = true;
    pulse.enable = true;
  };"""


def _footer(s: Settings) -> str:
    return f"""\
  # Enable flakes (optional)
  nix.settings.experimental-features = [ "nix-command" "flakes" ];

  system.stateVersion = "{s.system_state_version}";
}}
"""


def _home_manager_variant(s: Settings) -> str:
    return f"""\
{_header(s)}
  imports = [
    ./hardware-configuration.nix
    {HOME_MANAGER_IMPORT}
  ];

{_boot_and_network(s)}

  # Users
  users.users.{s.username} = {{
    isNormalUser = true;
    description = "{s.description}";
    extraGroups = [ "networkmanager" "wheel" ];
  }};

  # Enable programs needed for Wayland/Hyprland
  programs.hyprland.enable = true;

{_PORTAL_AND_AUDIO}

  nixpkgs.config.allowUnfree = true;

  # System packages (minimal - most stuff in Home Manager)
  environment.systemPackages = with pkgs; [
    git
    curl
    wget
    neovim
  ];

  # Home Manager
  home-manager = {{
    useGlobalPkgs = true;
    useUserPackages = true;
    users.{s.username} = {HOME_CONFIG_IMPORT};
    backupFileExtension = "bak";
    stateVersion = "{s.home_state_version}";
  }};

{_footer(s)}"""


def _fallback_variant(s: Settings) -> str:
    return f"""\
{_header(s)}
  imports = [
    ./hardware-configuration.nix
  ];

{_boot_and_network(s)}

  # Users
  users.users.{s.username} = {{
    isNormalUser = true;
    description = "{s.description}";
    extraGroups = [ "networkmanager" "wheel" ];
    shell = pkgs.fish;
  }};

  # Enable essential programs
  programs.fish.enable = true;
  programs.hyprland.enable = true;

  nixpkgs.config.allowUnfree = true;

  # System packages (includes user essentials)
  environment.systemPackages = with pkgs; [
    # Core system
    git
    curl
    wget
    neovim

    # Terminal and shell
    alacritty
    fish
    starship
    eza
    bat
    ripgrep
    fd
    fzf
    zoxide

    # Wayland/Hyprland essentials
    waybar
    fuzzel
    mako
    grim
    slurp
    wl-clipboard
    hyprpaper

    # GUI applications
    firefox
    mpv
    imv
    pavucontrol

    # Development
    rustc
    cargo
    rust-analyzer
    nodejs
    python3

    # Productivity
    obsidian
    anki-bin
    btop
  ];

  fonts.packages = with pkgs; [
    noto-fonts
    noto-fonts-cjk-sans
    nerd-fonts.jetbrains.mono
  ];

{_PORTAL_AND_AUDIO}

{_footer(s)}"""


def generate_system_config(settings: Settings, home_manager: bool = True) -> GeneratedFile:
    """Generate c.nix in the requested variant.

    Args:
        settings: Personalisation values.
        home_manager: True for the home-manager variant, False for fallback.

    Returns:
        GeneratedFile for c.nix.
    """
    if home_manager:
        content = _home_manager_variant(settings)
        reason = "System configuration with Home Manager integration"
    else:
        content = _fallback_variant(settings)
        reason = "System configuration without Home Manager (fallback)"

    return GeneratedFile(path=SYSTEM_CONFIG_FILE, content=content, reason=reason)


def detect_variant(content: str | None) -> str:
    """Classify an existing c.nix: 'home-manager', 'fallback' or 'missing'."""
    if content is None:
        return "missing"
    return "home-manager" if "home-manager/nixos" in content else "fallback"
