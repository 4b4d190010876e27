"""
Nix adapter — evaluator, channel and rebuild operations.

Wraps the Nix command line tools through the adapter protocol. Nothing
here interprets Nix code: the evaluator owns all semantics, we only
look at exit codes.
"""

from __future__ import annotations

import logging
import shutil

from nixdots.adapters.base import Adapter, ExecutionContext
from nixdots.adapters.shell.command import run_command
from nixdots.core.models.action import Receipt

logger = logging.getLogger(__name__)

NIXOS_ENTRYPOINT = "<nixpkgs/nixos>"


class NixAdapter(Adapter):
    """Nix evaluator, channel manager and ``nixos-rebuild``.

    Action params:
        operation (str): One of 'probe', 'channel-add', 'channel-update',
                         'evaluate', 'rebuild'.
        expr (str): Expression to evaluate (for 'probe').
        url (str), channel (str): Channel to subscribe (for 'channel-add').
        config (str): configuration.nix to evaluate (for 'evaluate').
        mode (str): nixos-rebuild sub-command (for 'rebuild', default 'switch').
        timeout (int): Timeout in seconds.
    """

    @property
    def name(self) -> str:
        return "nix"

    def is_available(self) -> bool:
        return shutil.which("nix-instantiate") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        params = context.action.params
        operation = params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"

        required = {
            "probe": ("expr",),
            "channel-add": ("url", "channel"),
            "channel-update": (),
            "evaluate": ("config",),
            "rebuild": (),
        }
        if operation not in required:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(required))}"

        for key in required[operation]:
            if not params.get(key):
                return False, f"Missing required param: '{key}' for {operation} operation"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        operation = params["operation"]
        timeout = params.get("timeout", 300)
        stream = False

        if operation == "probe":
            argv = ["nix-instantiate", "--eval", "-E", params["expr"]]
        elif operation == "channel-add":
            argv = ["nix-channel", "--add", params["url"], params["channel"]]
        elif operation == "channel-update":
            argv = ["nix-channel", "--update"]
        elif operation == "evaluate":
            argv = [
                "nix-instantiate",
                NIXOS_ENTRYPOINT,
                "-A",
                "system",
                "-I",
                f"nixos-config={params['config']}",
            ]
        elif operation == "rebuild":
            argv = ["nixos-rebuild", params.get("mode", "switch")]
            # Rebuild output belongs on the terminal and may take a long time.
            stream = True
            timeout = params.get("timeout")
        else:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Unknown operation: {operation}",
            )

        return run_command(
            self.name,
            context.action.id,
            argv,
            sudo=context.needs_sudo,
            stream=stream,
            timeout=timeout,
            cwd=context.working_dir,
        )
