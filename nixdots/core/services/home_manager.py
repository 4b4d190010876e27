"""
Home-manager capability — probe and channel installation.

The probe is the one decision everything else branches on: if the Nix
evaluator can resolve ``<home-manager>``, the home-manager template
bundle is used; otherwise the fallback bundle.
"""

from __future__ import annotations

import logging

from nixdots.adapters.registry import AdapterRegistry
from nixdots.core.models.action import Action
from nixdots.core.models.settings import Settings

logger = logging.getLogger(__name__)

PROBE_EXPR = "<home-manager>"

# Action ids (tests key mock responses on these)
PROBE_ACTION = "probe-home-manager"
CHANNEL_ADD_ACTION = "channel-add"
CHANNEL_UPDATE_ACTION = "channel-update"


def check_home_manager(registry: AdapterRegistry) -> bool:
    """True if ``<home-manager>`` is resolvable by the evaluator."""
    receipt = registry.execute_action(
        Action(
            id=PROBE_ACTION,
            name="Probing for home-manager",
            adapter="nix",
            params={"operation": "probe", "expr": PROBE_EXPR},
        )
    )
    logger.debug("home-manager probe: %s", receipt.status)
    return receipt.ok


def install_home_manager(registry: AdapterRegistry, settings: Settings) -> bool:
    """Subscribe to the home-manager channel, update, and re-probe.

    Failures of the channel commands are logged, not raised: the final
    probe is what decides.

    Returns:
        Whether home-manager resolves afterwards.
    """
    add = registry.execute_action(
        Action(
            id=CHANNEL_ADD_ACTION,
            name=f"Adding channel {settings.channel_name}",
            adapter="nix",
            privileged=True,
            params={
                "operation": "channel-add",
                "url": settings.channel_url,
                "channel": settings.channel_name,
            },
        )
    )
    if add.failed:
        logger.warning("nix-channel --add failed: %s", add.error)

    update = registry.execute_action(
        Action(
            id=CHANNEL_UPDATE_ACTION,
            name="Updating channels",
            adapter="nix",
            privileged=True,
            params={"operation": "channel-update", "timeout": 900},
        )
    )
    if update.failed:
        logger.warning("nix-channel --update failed: %s", update.error)

    return check_home_manager(registry)
