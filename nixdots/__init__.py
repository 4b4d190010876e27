"""nixdots — scaffold and sync a personal NixOS dotfiles workflow."""

__version__ = "0.1.0"
