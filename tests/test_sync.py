"""
Tests for the sync use case — copy gating, check, rebuild and commit.
"""

from pathlib import Path

import pytest

from nixdots.adapters.mock import MockAdapter
from nixdots.adapters.registry import AdapterRegistry
from nixdots.core.models.settings import Settings
from nixdots.core.services.generators.home_config import generate_home_config
from nixdots.core.services.generators.system_config import generate_system_config
from nixdots.core.services.home_manager import PROBE_ACTION
from nixdots.core.use_cases.sync import run_sync


def _scaffold(settings: Settings, home_manager: bool = True) -> Path:
    root = settings.dotfiles_path
    root.mkdir(parents=True, exist_ok=True)
    (root / "c.nix").write_text(generate_system_config(settings, home_manager).content)
    (root / "h.nix").write_text(generate_home_config(settings).content)
    (root / "hardware-configuration.nix").write_text("{ }\n")
    return root


def _installed(shell: MockAdapter) -> list[str]:
    return [c.action.id for c in shell.call_log]


@pytest.fixture
def root(settings: Settings) -> Path:
    return _scaffold(settings)


class TestSyncCopy:
    def test_copies_with_home_config(
        self, settings: Settings, registry: AdapterRegistry, shell: MockAdapter, root: Path,
    ):
        result = run_sync(settings, registry=registry, check_only=True)
        assert result.ok
        assert _installed(shell) == [
            "install:c.nix", "install:h.nix", "install:hardware-configuration.nix",
        ]
        first = shell.call_log[0].action
        assert first.privileged
        assert first.params["command"] == [
            "cp", str(root / "c.nix"), str(settings.system_path / "configuration.nix"),
        ]

    def test_fallback_does_not_copy_home_config(
        self, settings: Settings, registry: AdapterRegistry, shell: MockAdapter,
    ):
        _scaffold(settings, home_manager=False)
        result = run_sync(settings, registry=registry, check_only=True)
        assert result.ok
        assert "install:h.nix" not in _installed(shell)
        assert result.synced_files == ["c.nix", "hardware-configuration.nix"]

    def test_copy_failure(
        self, settings: Settings, registry: AdapterRegistry, shell: MockAdapter, root: Path,
    ):
        shell.set_failure("install:c.nix", error="Permission denied")
        result = run_sync(settings, registry=registry, force=True)
        assert not result.ok
        assert result.exit_code == 1
        assert result.stage == "copy"
        assert "Permission denied" in result.error


class TestSyncPreconditions:
    def test_missing_dotfiles_dir(self, settings: Settings, registry: AdapterRegistry):
        result = run_sync(settings, registry=registry)
        assert not result.ok
        assert "Run the setup script first" in result.error
        assert result.exit_code == 1

    def test_missing_system_config(self, settings: Settings, registry: AdapterRegistry, root: Path):
        (root / "c.nix").unlink()
        result = run_sync(settings, registry=registry)
        assert not result.ok
        assert "c.nix not found" in result.error

    def test_hardware_config_copied_in(
        self, settings: Settings, registry: AdapterRegistry, root: Path, system_dir: Path,
    ):
        (root / "hardware-configuration.nix").unlink()
        (system_dir / "hardware-configuration.nix").write_text("# generated\n")
        result = run_sync(settings, registry=registry, check_only=True)
        assert result.ok
        assert (root / "hardware-configuration.nix").read_text() == "# generated\n"

    def test_hardware_config_missing_everywhere_warns(
        self, settings: Settings, registry: AdapterRegistry, shell: MockAdapter, root: Path,
    ):
        (root / "hardware-configuration.nix").unlink()
        lines = []
        result = run_sync(
            settings, registry=registry, check_only=True, silent=True,
            progress=lambda k, m: lines.append((k, m)),
        )
        assert result.ok
        assert "install:hardware-configuration.nix" not in _installed(shell)
        # Warnings survive --silent
        assert any(k == "warn" and "nixos-generate-config" in m for k, m in lines)


class TestSyncCheck:
    def test_home_manager_missing(
        self, settings: Settings, registry: AdapterRegistry, nix: MockAdapter, root: Path,
    ):
        nix.set_failure(PROBE_ACTION)
        result = run_sync(settings, registry=registry, force=True)
        assert not result.ok
        assert result.stage == "check"
        assert result.error == "Configuration check failed. Aborting rebuild."
        assert any("nix-channel --add" in h for h in result.hints)
        assert nix.calls_for("rebuild") == []

    def test_fallback_skips_home_manager_lookup(
        self, settings: Settings, registry: AdapterRegistry, nix: MockAdapter,
    ):
        _scaffold(settings, home_manager=False)
        nix.set_failure(PROBE_ACTION)
        result = run_sync(settings, registry=registry, check_only=True)
        assert result.ok
        assert nix.calls_for(PROBE_ACTION) == []

    def test_evaluation_failure(
        self, settings: Settings, registry: AdapterRegistry, nix: MockAdapter, root: Path,
    ):
        nix.set_failure("evaluate-configuration", error="syntax error, unexpected '}'")
        result = run_sync(settings, registry=registry, force=True)
        assert not result.ok
        assert "Configuration syntax error detected!" in result.details
        assert nix.calls_for("rebuild") == []

    def test_evaluation_targets_synced_config(
        self, settings: Settings, registry: AdapterRegistry, nix: MockAdapter, root: Path,
    ):
        run_sync(settings, registry=registry, check_only=True)
        action = nix.calls_for("evaluate-configuration")[0].action
        assert action.privileged
        assert action.params["config"] == str(settings.system_path / "configuration.nix")

    def test_check_only_never_rebuilds(
        self, settings: Settings, registry: AdapterRegistry, nix: MockAdapter, root: Path,
    ):
        asked = []
        result = run_sync(
            settings, registry=registry, check_only=True, force=True,
            confirm_rebuild=lambda: asked.append(1) or True,
        )
        assert result.ok
        assert result.checked
        assert not result.rebuilt
        assert nix.calls_for("rebuild") == []
        assert asked == []

    def test_check_only_reports_even_when_silent(
        self, settings: Settings, registry: AdapterRegistry, root: Path,
    ):
        lines = []
        run_sync(
            settings, registry=registry, check_only=True, silent=True,
            progress=lambda k, m: lines.append(m),
        )
        assert lines == ["Configuration check completed successfully!"]


class TestSyncRebuild:
    def test_force_rebuilds_without_prompt(
        self, settings: Settings, registry: AdapterRegistry, nix: MockAdapter, root: Path,
    ):
        asked = []
        result = run_sync(
            settings, registry=registry, force=True,
            confirm_rebuild=lambda: asked.append(1) or False,
        )
        assert result.ok
        assert result.rebuilt
        assert asked == []
        rebuild = nix.calls_for("rebuild")[0].action
        assert rebuild.privileged
        assert rebuild.params["mode"] == "switch"

    def test_prompt_accepted(
        self, settings: Settings, registry: AdapterRegistry, nix: MockAdapter, root: Path,
    ):
        result = run_sync(settings, registry=registry, confirm_rebuild=lambda: True)
        assert result.ok
        assert result.rebuilt
        assert len(nix.calls_for("rebuild")) == 1

    def test_prompt_declined(
        self, settings: Settings, registry: AdapterRegistry, nix: MockAdapter, root: Path,
    ):
        lines = []
        result = run_sync(
            settings, registry=registry, confirm_rebuild=lambda: False,
            progress=lambda k, m: lines.append(m),
        )
        assert result.ok
        assert result.exit_code == 0
        assert not result.rebuilt
        assert nix.calls_for("rebuild") == []
        assert any("sudo nixos-rebuild switch" in m for m in lines)

    def test_prompt_declined_reported_when_silent(
        self, settings: Settings, registry: AdapterRegistry, root: Path,
    ):
        lines = []
        run_sync(
            settings, registry=registry, silent=True, confirm_rebuild=lambda: False,
            progress=lambda k, m: lines.append(m),
        )
        assert lines == [
            "Skipping rebuild. Run 'sudo nixos-rebuild switch' manually when ready.",
        ]

    def test_prompt_accepted_reported_when_silent(
        self, settings: Settings, registry: AdapterRegistry, root: Path,
    ):
        lines = []
        result = run_sync(
            settings, registry=registry, silent=True, confirm_rebuild=lambda: True,
            progress=lambda k, m: lines.append(m),
        )
        assert result.rebuilt
        assert lines == ["Rebuilding system...", "System rebuilt successfully!"]

    def test_silent_force_stays_quiet(
        self, settings: Settings, registry: AdapterRegistry, root: Path,
    ):
        lines = []
        result = run_sync(
            settings, registry=registry, force=True, silent=True,
            progress=lambda k, m: lines.append(m),
        )
        assert result.rebuilt
        assert lines == []

    def test_rebuild_failure(
        self, settings: Settings, registry: AdapterRegistry, nix: MockAdapter, root: Path,
    ):
        nix.set_failure("rebuild")
        result = run_sync(settings, registry=registry, force=True)
        assert not result.ok
        assert result.exit_code == 1
        assert result.error == "Rebuild failed! Check the error messages above."


class TestSyncCommit:
    def test_force_commits_in_git_repo(
        self, settings: Settings, registry: AdapterRegistry, git: MockAdapter, root: Path,
    ):
        (root / ".git").mkdir()
        result = run_sync(settings, registry=registry, force=True)
        assert result.committed
        message = git.calls_for("git-commit")[0].action.params["message"]
        assert message.startswith("Auto-update: ")

    def test_silent_force_does_not_commit(
        self, settings: Settings, registry: AdapterRegistry, git: MockAdapter, root: Path,
    ):
        (root / ".git").mkdir()
        run_sync(settings, registry=registry, force=True, silent=True)
        assert git.calls_for("git-commit") == []

    def test_no_commit_without_force(
        self, settings: Settings, registry: AdapterRegistry, git: MockAdapter, root: Path,
    ):
        (root / ".git").mkdir()
        run_sync(settings, registry=registry, confirm_rebuild=lambda: True)
        assert git.calls_for("git-commit") == []

    def test_no_commit_outside_git_repo(
        self, settings: Settings, registry: AdapterRegistry, git: MockAdapter, root: Path,
    ):
        run_sync(settings, registry=registry, force=True)
        assert git.calls_for("git-commit") == []

    def test_nothing_to_commit_is_success(
        self, settings: Settings, registry: AdapterRegistry, git: MockAdapter, root: Path,
    ):
        (root / ".git").mkdir()
        git.set_failure("git-commit")
        lines = []
        result = run_sync(
            settings, registry=registry, force=True,
            progress=lambda k, m: lines.append(m),
        )
        assert result.ok
        assert not result.committed
        assert "Nothing to commit" in lines
