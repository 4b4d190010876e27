"""
Smoke tests — verify the bootstrap is healthy.

These tests ensure the basic scaffolding works:
- Package imports successfully
- CLI entrypoint responds
- Version is set
"""

from click.testing import CliRunner

from nixdots import __version__
from nixdots.main import cli


class TestBootstrap:
    """Verify the project bootstrap is healthy."""

    def test_version_is_set(self):
        """Version string should be defined and non-empty."""
        assert __version__
        assert isinstance(__version__, str)

    def test_cli_help(self):
        """CLI --help should exit cleanly with usage info."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "NixOS dotfiles" in result.output

    def test_cli_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_subcommand_help(self):
        runner = CliRunner()
        for args in (["setup"], ["sync"], ["status"], ["config", "check"], ["channel", "add"]):
            result = runner.invoke(cli, [*args, "--help"])
            assert result.exit_code == 0, args

    def test_core_package_imports(self):
        """Core sub-packages should be importable."""
        import nixdots.adapters
        import nixdots.core.config
        import nixdots.core.models
        import nixdots.core.observability
        import nixdots.core.services.generators
        import nixdots.core.use_cases
        import nixdots.ui.cli

    def test_declared_python_floor_matches_code(self):
        """datetime.UTC needs 3.11; the declared floor must not be lower."""
        import tomllib
        from pathlib import Path

        pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        assert data["project"]["requires-python"] == ">=3.11"
