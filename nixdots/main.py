"""
nixdots — CLI entrypoint.

Usage:
    nixdots --help
    nixdots setup
    nixdots sync --check
    nixdots status
    nixdots config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from nixdots import __version__
from nixdots.core.observability.logging_config import resolve_level, setup_logging

_PROGRESS_STYLE = {
    "step": ("🔍", "cyan"),
    "ok": ("✅", "green"),
    "warn": ("⚠️ ", "yellow"),
    "info": ("📝", None),
}


def _progress(kind: str, message: str) -> None:
    """Render one progress line from a use case."""
    icon, color = _PROGRESS_STYLE.get(kind, ("•", None))
    click.secho(f"{icon} {message}", fg=color)


def _load_settings_or_exit(ctx: click.Context):
    """Load nixdots.yml (or the defaults), exiting 1 on a config error."""
    from nixdots.core.config.loader import ConfigError, load_settings

    try:
        return load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="nixdots")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to nixdots.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """nixdots — scaffold and sync your NixOS dotfiles."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    from nixdots.core.context import set_config_path

    set_config_path(ctx.obj["config_path"])

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(level=resolve_level(debug=debug, verbose=verbose, quiet=quiet))


@cli.command()
@click.option("--username", default=None, help="Login name (default: from nixdots.yml).")
@click.option("--hostname", default=None, help="networking.hostName for the machine.")
@click.option("--git-email", default=None, help="E-mail for the git identity in h.nix.")
@click.option("--dir", "dotfiles_dir", default=None, help="Dotfiles directory (default: /home/<username>/<username>Nix).")
@click.option(
    "--install-home-manager/--skip-home-manager",
    "install_home_manager",
    default=None,
    help="Answer the Home Manager install prompt up front.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def setup(
    ctx: click.Context,
    username: str | None,
    hostname: str | None,
    git_email: str | None,
    dotfiles_dir: str | None,
    install_home_manager: bool | None,
    as_json: bool,
) -> None:
    """Create the dotfiles repository: c.nix, h.nix, modules and sync.sh."""
    from nixdots.adapters.registry import build_registry
    from nixdots.core.models.settings import Settings, default_dotfiles_dir
    from nixdots.core.use_cases.setup import run_setup

    loaded = _load_settings_or_exit(ctx)
    overrides = {
        key: value
        for key, value in {
            "username": username,
            "hostname": hostname,
            "git_email": git_email,
            "dotfiles_dir": dotfiles_dir,
        }.items()
        if value is not None
    }
    data = loaded.model_dump()
    if "username" in overrides:
        # Derived fields follow the new username unless set explicitly
        if data["description"] == loaded.username:
            data["description"] = ""
        if data["dotfiles_dir"] == str(Path(default_dotfiles_dir(loaded.username)).resolve()):
            data["dotfiles_dir"] = ""
    data.update(overrides)
    settings = Settings.model_validate(data)

    def confirm() -> bool:
        if install_home_manager is not None:
            return install_home_manager
        if as_json:
            return False
        return click.confirm("Would you like to install Home Manager?", default=False)

    result = run_setup(
        settings,
        registry=build_registry(),
        confirm_install=confirm,
        progress=None if as_json else _progress,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if result.variant == "fallback":
        click.secho("⚠️  Created fallback configuration without Home Manager.", fg="yellow")
        click.echo("📝 All packages are now defined in c.nix under environment.systemPackages")
    for hint in result.hints:
        click.echo(f"🔧 {hint}")

    if ctx.obj.get("quiet"):
        return

    root = settings.dotfiles_dir.rstrip("/")
    click.echo()
    click.secho("✅ Setup complete! Here's what was created:", fg="green", bold=True)
    click.echo(f"   📁 {root}/c.nix          - Your system configuration")
    click.echo(f"   📁 {root}/h.nix          - Your home manager configuration")
    click.echo(f"   📁 {root}/sync.sh        - Enhanced script with error checking")
    click.echo(f"   📁 {root}/modules/       - Modular configuration files")
    click.echo(f"   📁 {root}/.git           - Git repository for version control")
    if ctx.obj.get("verbose"):
        for name in result.files_written:
            click.echo(f"     • {name}")
    click.echo()
    click.secho("🔧 sync.sh options:", bold=True)
    click.echo("   ./sync.sh --check          - Only check configuration syntax")
    click.echo("   ./sync.sh --force          - Force rebuild without prompting")
    click.echo("   ./sync.sh --silent         - Run quietly")
    click.echo()
    click.secho("🚀 Next steps:", bold=True)
    click.echo("   1. Run './sync.sh --check' to verify your config")
    click.echo("   2. Run './sync.sh' to apply changes")
    click.echo("   3. If you see Home Manager errors, the script will guide you")
    click.echo()
    click.secho("🛠️  Troubleshooting:", bold=True)
    click.echo(f"   - If Home Manager fails: {settings.channel_hint()}")
    click.echo("   - Check config syntax: ./sync.sh --check")
    click.echo("   - For detailed errors: sudo nixos-rebuild switch --show-trace")
    click.echo()


@cli.command()
@click.option("--force", is_flag=True, help="Rebuild without prompting.")
@click.option("--silent", is_flag=True, help="Run quietly.")
@click.option("--check", "check_only", is_flag=True, help="Only check configuration syntax.")
@click.pass_context
def sync(ctx: click.Context, force: bool, silent: bool, check_only: bool) -> None:
    """Copy the dotfiles into /etc/nixos, check them, and rebuild."""
    from nixdots.adapters.registry import build_registry
    from nixdots.core.use_cases.sync import run_sync

    settings = _load_settings_or_exit(ctx)

    def confirm() -> bool:
        click.echo()
        return click.confirm("Rebuild system now?", default=False)

    result = run_sync(
        settings,
        registry=build_registry(),
        force=force,
        silent=silent,
        check_only=check_only,
        confirm_rebuild=confirm,
        progress=_progress,
    )

    if result.ok:
        return

    for line in result.details:
        click.secho(f"❌ {line}", fg="red")
    for hint in result.hints:
        click.echo(f"🔧 {hint}")
    click.secho(f"❌ {result.error}", fg="red")
    sys.exit(result.exit_code)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show what setup has produced and whether Home Manager resolves."""
    from nixdots.adapters.registry import build_registry
    from nixdots.core.use_cases.status import get_status

    settings = _load_settings_or_exit(ctx)
    result = get_status(settings, registry=build_registry())

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(f"\n📋 {result.dotfiles_dir}", fg="cyan", bold=True)
    if not result.exists:
        click.secho("   Not created yet. Run 'nixdots setup'.", fg="yellow")
    else:
        click.echo(f"   Variant: {result.variant}")
        click.echo(f"   Git: {'initialised' if result.git_initialized else 'not initialised'}")
        click.echo()
        for name, present in result.files.items():
            if present:
                click.secho(f"   ✓ {name}", fg="green")
            else:
                click.secho(f"   ✗ {name}", fg="red")

    click.echo()
    if result.home_manager_available:
        click.secho("   Home Manager: available", fg="green")
    else:
        click.secho("   Home Manager: not found in NIX_PATH", fg="yellow")
    click.echo()


@cli.group()
def config() -> None:
    """nixdots.yml commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate nixdots.yml."""
    from nixdots.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.settings is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   User: {result.settings.username}")
        click.echo(f"   Host: {result.settings.hostname}")
        click.echo(f"   Dotfiles: {result.settings.dotfiles_dir}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


# ── Register sub-command groups from nixdots/ui/cli/ ──────────────

from nixdots.ui.cli.channel import channel

cli.add_command(channel)


if __name__ == "__main__":
    cli()
