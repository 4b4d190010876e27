"""
CLI commands for the home-manager channel.

Thin wrappers over ``nixdots.core.services.home_manager``.
"""

from __future__ import annotations

import sys

import click


@click.group()
def channel() -> None:
    """Home Manager channel — probe and install."""


@channel.command()
def check() -> None:
    """Check whether <home-manager> resolves in NIX_PATH."""
    from nixdots.adapters.registry import build_registry
    from nixdots.core.services.home_manager import check_home_manager

    if check_home_manager(build_registry()):
        click.secho("✅ Home Manager found", fg="green")
        return

    click.secho("⚠️  Home Manager not found in NIX_PATH", fg="yellow")
    sys.exit(1)


@channel.command()
def add() -> None:
    """Subscribe to the Home Manager channel and update (uses sudo)."""
    from nixdots.adapters.registry import build_registry
    from nixdots.core.config.loader import ConfigError, load_settings
    from nixdots.core.context import get_config_path
    from nixdots.core.services.home_manager import install_home_manager

    try:
        settings = load_settings(get_config_path())
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.secho(f"📦 Installing {settings.channel_name} channel...", fg="cyan")
    if install_home_manager(build_registry(), settings):
        click.secho("✅ Home Manager installed successfully!", fg="green")
        return

    click.secho("❌ Failed to install Home Manager.", fg="red")
    click.echo(f"🔧 Try manually: {settings.channel_hint()}")
    sys.exit(1)
