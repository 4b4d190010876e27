"""
Module fragment generator — the home-manager fragments under modules/.

Fragments carry no personal values and are written verbatim. The order
of MODULE_NAMES is the import order in h.nix.
"""

from __future__ import annotations

from nixdots.core.models.template import GeneratedFile

MODULES_DIR = "modules"

_HYPRLAND = r"""# Hyprland and window manager setup
{ config, pkgs, ... }:
{
  # Hyprland window manager
  wayland.windowManager.hyprland = {
    enable = true;
    settings = {
      # Monitors - adjust for your display
      monitor = [
        ",preferred,auto,auto"
      ];

      # Startup applications
      exec-once = [
        "waybar"
        "mako"
        "hyprpaper"
      ];

      # Key bindings
      bind = [
        "SUPER, RETURN, exec, alacritty"
        "SUPER, Q, killactive"
        "SUPER, M, exit"
        "SUPER, E, exec, nautilus"
        "SUPER, V, togglefloating"
        "SUPER, R, exec, fuzzel"
        "SUPER, P, pseudo"
        "SUPER, J, togglesplit"

        # Screenshots
        ", Print, exec, grim -g \"$(slurp)\" - | wl-copy"
        "SHIFT, Print, exec, grim -g \"$(slurp)\" ~/Pictures/screenshot_$(date +%Y%m%d_%H%M%S).png"

        # Movement
        "SUPER, H, movefocus, l"
        "SUPER, L, movefocus, r"
        "SUPER, K, movefocus, u"
        "SUPER, J, movefocus, d"

        # Workspaces
        "SUPER, 1, workspace, 1"
        "SUPER, 2, workspace, 2"
        "SUPER, 3, workspace, 3"
        "SUPER, 4, workspace, 4"
        "SUPER, 5, workspace, 5"

        # Move windows to workspaces
        "SUPER SHIFT, 1, movetoworkspace, 1"
        "SUPER SHIFT, 2, movetoworkspace, 2"
        "SUPER SHIFT, 3, movetoworkspace, 3"
        "SUPER SHIFT, 4, movetoworkspace, 4"
        "SUPER SHIFT, 5, movetoworkspace, 5"
      ];

      # Window rules for productivity
      windowrulev2 = [
        "float,class:^(Anki)$"
        "size 1200 800,class:^(Anki)$"
        "center,class:^(Anki)$"
      ];
    };
  };

  # Waybar configuration
  programs.waybar = {
    enable = true;
    settings = {
      mainBar = {
        layer = "top";
        position = "top";
        height = 35;

        modules-left = [ "hyprland/workspaces" "hyprland/window" ];
        modules-center = [ "clock" ];
        modules-right = [ "pulseaudio" "network" "battery" "tray" ];

        "hyprland/workspaces" = {
          disable-scroll = true;
          all-outputs = true;
          format = "{icon}";
          format-icons = {
            "1" = "󰈹";
            "2" = "";
            "3" = "";
            "4" = "󰎆";
            "5" = "󰍳";
            default = "";
          };
        };

        clock = {
          format = "{:%H:%M}";
          format-alt = "{:%A, %B %d, %Y (%R)}";
          tooltip-format = "<tt><small>{calendar}</small></tt>";
        };

        battery = {
          format = "{capacity}% {icon}";
          format-icons = ["" "" "" "" ""];
        };

        network = {
          format-wifi = "{essid} ";
          format-ethernet = "Connected ";
          format-disconnected = "Disconnected ⚠";
        };

        pulseaudio = {
          format = "{volume}% {icon}";
          format-muted = "🔇";
          format-icons = {
            default = ["🔈" "🔉" "🔊"];
          };
        };
      };
    };

    style = ''
      * {
        font-family: "JetBrains Mono Nerd Font";
        font-size: 13px;
        border: none;
        border-radius: 0;
        min-height: 0;
      }

      window#waybar {
        background: rgba(26, 27, 38, 0.9);
        color: #c0caf5;
        border-bottom: 2px solid #7aa2f7;
      }

      #workspaces button {
        padding: 0 10px;
        color: #565f89;
      }

      #workspaces button.active {
        color: #7aa2f7;
        background: rgba(122, 162, 247, 0.2);
      }
    '';
  };

  # Screenshot utilities
  home.packages = with pkgs; [
    grim
    slurp
    wl-clipboard
  ];
}
"""

_TERMINAL = r"""# Terminal and shell configuration
{ config, pkgs, ... }:
{
  # Fish shell configuration
  programs.fish = {
    enable = true;
    shellAliases = {
      ll = "eza -la";
      la = "eza -la";
      ls = "eza";
      cat = "bat";
      find = "fd";
      grep = "rg";
    };
  };

  # Alacritty terminal
  programs.alacritty = {
    enable = true;
    settings = {
      window = {
        padding = { x = 10; y = 10; };
        opacity = 0.95;
      };
      font = {
        normal = { family = "JetBrains Mono Nerd Font"; };
        size = 12;
      };
      colors = {
        primary = {
          background = "0x1a1b26";
          foreground = "0xc0caf5";
        };
      };
    };
  };

  # Starship prompt
  programs.starship = {
    enable = true;
    settings = {
      format = "$directory$git_branch$git_status$character";
      character = {
        success_symbol = "[➜](bold green)";
        error_symbol = "[➜](bold red)";
      };
    };
  };

  # Essential CLI tools
  home.packages = with pkgs; [
    eza
    bat
    ripgrep
    fd
    fzf
    zoxide
  ];
}
"""

_APPS = r"""# GUI Applications
{ config, pkgs, ... }:
{
  home.packages = with pkgs; [
    # Web browser
    firefox

    # File manager
    nautilus

    # Media
    mpv
    imv

    # Audio control
    pavucontrol

    # Launcher
    fuzzel
  ];

  # Fuzzel launcher configuration
  programs.fuzzel = {
    enable = true;
    settings = {
      main = {
        font = "JetBrains Mono Nerd Font:size=12";
        terminal = "alacritty";
      };
      colors = {
        background = "1a1b26dd";
        text = "c0caf5ff";
        selection = "7aa2f7ff";
        selection-text = "1a1b26ff";
      };
    };
  };
}
"""

_THEME = r"""# Theme and appearance configuration
{ config, pkgs, ... }:
{
  # Notification daemon
  services.mako = {
    enable = true;
    backgroundColor = "#1a1b26";
    textColor = "#c0caf5";
    borderColor = "#7aa2f7";
    borderRadius = 8;
    font = "JetBrains Mono Nerd Font 11";
  };

  # GTK theme
  gtk = {
    enable = true;
    theme = {
      package = pkgs.tokyo-night-gtk;
      name = "Tokyonight-Dark-B";
    };
  };
}
"""

_DEVELOPMENT = r"""# Development tools and environments
{ config, pkgs, ... }:
{
  home.packages = with pkgs; [
    # Rust development
    rustc
    cargo
    rust-analyzer

    # Web development
    nodejs

    # Python
    python3

    # Version control
    git

    # Editor
    neovim
  ];

  # Git configuration is in main h.nix file
  # Add more development-specific configs here
}
"""

_PRODUCTIVITY = r"""# Productivity and learning applications
{ config, pkgs, ... }:
{
  home.packages = with pkgs; [
    # Knowledge management
    obsidian

    # Flashcards for learning
    anki-bin

    # System monitoring
    btop

    # Utilities
    tree
    unzip
    p7zip
  ];
}
"""

_FRAGMENTS: dict[str, str] = {
    "hyprland": _HYPRLAND,
    "terminal": _TERMINAL,
    "apps": _APPS,
    "theme": _THEME,
    "development": _DEVELOPMENT,
    "productivity": _PRODUCTIVITY,
}

MODULE_NAMES: tuple[str, ...] = tuple(_FRAGMENTS)


def generate_module(name: str) -> GeneratedFile:
    """One fragment by name (e.g. 'terminal').

    Raises:
        KeyError: If no fragment has that name.
    """
    content = _FRAGMENTS[name]
    first_line = content.splitlines()[0].lstrip("# ")
    return GeneratedFile(
        path=f"{MODULES_DIR}/{name}.nix",
        content=content,
        reason=first_line,
    )


def generate_modules() -> list[GeneratedFile]:
    """All fragments, in import order."""
    return [generate_module(name) for name in MODULE_NAMES]
