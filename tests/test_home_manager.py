"""
Tests for the home-manager probe and channel installation.
"""

from nixdots.adapters.mock import MockAdapter
from nixdots.adapters.registry import AdapterRegistry
from nixdots.core.models.settings import Settings
from nixdots.core.services.home_manager import (
    CHANNEL_ADD_ACTION,
    CHANNEL_UPDATE_ACTION,
    PROBE_ACTION,
    check_home_manager,
    install_home_manager,
)


class TestCheckHomeManager:
    def test_present(self, registry: AdapterRegistry, nix: MockAdapter):
        assert check_home_manager(registry)
        call = nix.calls_for(PROBE_ACTION)[0]
        assert call.action.params == {"operation": "probe", "expr": "<home-manager>"}
        assert not call.action.privileged

    def test_absent(self, registry: AdapterRegistry, nix: MockAdapter):
        nix.set_failure(PROBE_ACTION, error="file 'home-manager' was not found")
        assert not check_home_manager(registry)

    def test_no_nix_adapter(self):
        assert not check_home_manager(AdapterRegistry())


class TestInstallHomeManager:
    def test_success(self, registry: AdapterRegistry, nix: MockAdapter, settings: Settings):
        assert install_home_manager(registry, settings)
        ids = [c.action.id for c in nix.call_log]
        assert ids == [CHANNEL_ADD_ACTION, CHANNEL_UPDATE_ACTION, PROBE_ACTION]

    def test_channel_commands_are_privileged(
        self, registry: AdapterRegistry, nix: MockAdapter, settings: Settings,
    ):
        install_home_manager(registry, settings)
        add = nix.calls_for(CHANNEL_ADD_ACTION)[0].action
        assert add.privileged
        assert add.params["url"] == settings.channel_url
        assert add.params["channel"] == "home-manager"
        assert nix.calls_for(CHANNEL_UPDATE_ACTION)[0].action.privileged

    def test_channel_failure_is_not_raised(
        self, registry: AdapterRegistry, nix: MockAdapter, settings: Settings,
    ):
        nix.set_failure(CHANNEL_ADD_ACTION)
        nix.set_failure(CHANNEL_UPDATE_ACTION)
        nix.set_failure(PROBE_ACTION)
        assert not install_home_manager(registry, settings)
        # Update still attempted after a failed add
        assert len(nix.calls_for(CHANNEL_UPDATE_ACTION)) == 1

    def test_result_is_the_reprobe(
        self, registry: AdapterRegistry, nix: MockAdapter, settings: Settings,
    ):
        nix.set_failure(CHANNEL_UPDATE_ACTION)
        # Update failed but home-manager resolves anyway
        assert install_home_manager(registry, settings)
