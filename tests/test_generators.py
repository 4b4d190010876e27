"""
Tests for template generators — c.nix, h.nix, modules and repository files.
"""

from pathlib import Path

import pytest

from nixdots.core.config.loader import load_settings
from nixdots.core.models.settings import Settings
from nixdots.core.services.generators.home_config import (
    generate_home_config,
    generate_home_placeholder,
)
from nixdots.core.services.generators.modules import (
    MODULE_NAMES,
    generate_module,
    generate_modules,
)
from nixdots.core.services.generators.repo_files import (
    generate_gitignore,
    generate_readme,
    generate_settings_file,
    generate_sync_script,
)
from nixdots.core.services.generators.system_config import (
    HOME_CONFIG_IMPORT,
    HOME_MANAGER_IMPORT,
    detect_variant,
    generate_system_config,
)


@pytest.fixture
def s() -> Settings:
    return Settings(
        username="alice",
        description="Alice A.",
        hostname="alice-laptop",
        git_email="alice@example.org",
        dotfiles_dir="/home/alice/aliceNix",
    )


class TestSystemConfig:
    def test_home_manager_variant(self, s: Settings):
        content = generate_system_config(s, home_manager=True).content
        assert HOME_MANAGER_IMPORT in content
        assert "./hardware-configuration.nix" in content
        assert f"users.alice = {HOME_CONFIG_IMPORT};" in content
        assert 'backupFileExtension = "bak"' in content
        assert 'networking.hostName = "alice-laptop";' in content
        assert 'description = "Alice A.";' in content
        assert 'system.stateVersion = "25.11";' in content

    def test_fallback_variant(self, s: Settings):
        content = generate_system_config(s, home_manager=False).content
        assert HOME_MANAGER_IMPORT not in content
        assert HOME_CONFIG_IMPORT not in content
        assert "programs.fish.enable = true;" in content
        assert "shell = pkgs.fish;" in content
        assert "fonts.packages" in content

    def test_path(self, s: Settings):
        assert generate_system_config(s).path == "c.nix"

    def test_detect_variant(self, s: Settings):
        assert detect_variant(None) == "missing"
        assert detect_variant(generate_system_config(s, True).content) == "home-manager"
        assert detect_variant(generate_system_config(s, False).content) == "fallback"


class TestHomeConfig:
    def test_imports_every_module_by_absolute_path(self, s: Settings):
        content = generate_home_config(s).content
        for name in MODULE_NAMES:
            assert f"/home/alice/aliceNix/modules/{name}.nix" in content

    def test_default_dir_imports_ignore_home(self, monkeypatch):
        # sudo nixdots setup runs with HOME=/root
        monkeypatch.setenv("HOME", "/root")
        content = generate_home_config(Settings(username="alice")).content
        modules_dir = Path("/home/alice/aliceNix/modules").resolve()
        for name in MODULE_NAMES:
            assert f"{modules_dir}/{name}.nix" in content
        assert "/root/" not in content

    def test_relative_dir_imports_are_absolute(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        content = generate_home_config(Settings(username="alice", dotfiles_dir="dots")).content
        modules_dir = (tmp_path / "dots" / "modules").resolve()
        assert f"{modules_dir}/hyprland.nix" in content
        assert "./dots" not in content

    def test_identity(self, s: Settings):
        content = generate_home_config(s).content
        assert 'home.username = "alice";' in content
        assert 'home.homeDirectory = "/home/alice";' in content
        assert 'userEmail = "alice@example.org";' in content

    def test_placeholder_is_empty_module(self, s: Settings):
        generated = generate_home_placeholder(s)
        assert generated.path == "h.nix"
        assert "sudo nix-channel --update" in generated.content
        assert generated.content.rstrip().endswith("{\n}")
        assert "imports" not in generated.content


class TestModules:
    def test_six_fragments(self):
        assert MODULE_NAMES == (
            "hyprland", "terminal", "apps", "theme", "development", "productivity",
        )
        files = generate_modules()
        assert [f.path for f in files] == [f"modules/{n}.nix" for n in MODULE_NAMES]

    def test_fragments_are_nix_modules(self):
        for generated in generate_modules():
            assert "{ config, pkgs, ... }:" in generated.content
            assert generated.reason

    def test_terminal_enables_fish(self):
        assert "programs.fish" in generate_module("terminal").content

    def test_unknown_module(self):
        with pytest.raises(KeyError):
            generate_module("emacs")


class TestRepoFiles:
    def test_readme_title(self, s: Settings):
        content = generate_readme(s).content
        assert content.splitlines()[0] == "# AliceNix - Personal NixOS Configuration"
        assert "My personalized NixOS setup with Home Manager" in content

    def test_default_readme_title(self):
        assert generate_readme(Settings()).content.startswith(
            "# WlmrNix - Personal NixOS Configuration"
        )

    def test_sync_script(self):
        generated = generate_sync_script()
        assert generated.executable
        assert generated.content.startswith("#!/usr/bin/env bash")
        assert 'exec nixdots sync "$@"' in generated.content

    def test_gitignore(self):
        assert "hardware-configuration.nix" in generate_gitignore().content

    def test_settings_file_round_trips(self, s: Settings, tmp_path: Path):
        generated = generate_settings_file(s)
        assert generated.path == "nixdots.yml"
        path = tmp_path / generated.path
        path.write_text(generated.content)
        assert load_settings(path) == s
