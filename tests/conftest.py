"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from nixdots.adapters.mock import MockAdapter
from nixdots.adapters.registry import AdapterRegistry
from nixdots.adapters.shell.filesystem import FilesystemAdapter
from nixdots.core.models.settings import Settings


@pytest.fixture
def system_dir(tmp_path: Path) -> Path:
    """Stand-in for /etc/nixos."""
    path = tmp_path / "etc-nixos"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path: Path, system_dir: Path) -> Settings:
    """Settings pointing every path into tmp_path."""
    return Settings(
        username="alice",
        hostname="alice-laptop",
        git_email="alice@example.org",
        dotfiles_dir=str(tmp_path / "aliceNix"),
        system_config_dir=str(system_dir),
    )


@pytest.fixture
def nix() -> MockAdapter:
    return MockAdapter(adapter_name="nix")


@pytest.fixture
def git() -> MockAdapter:
    return MockAdapter(adapter_name="git")


@pytest.fixture
def shell() -> MockAdapter:
    return MockAdapter(adapter_name="shell")


@pytest.fixture
def registry(nix: MockAdapter, git: MockAdapter, shell: MockAdapter) -> AdapterRegistry:
    """Real filesystem adapter, mocked nix/git/shell — no external tools run."""
    reg = AdapterRegistry()
    reg.register(FilesystemAdapter())
    reg.register(nix)
    reg.register(git)
    reg.register(shell)
    return reg
