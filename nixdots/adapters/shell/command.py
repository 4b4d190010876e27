"""
Shell command adapter — execute external commands.

``run_command`` is the SINGLE PLACE where ``subprocess.run`` is called.
The nix and git adapters build their argv and hand it here, so sudo
handling, timeouts and error capture behave the same everywhere.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import time
from pathlib import Path

from nixdots.adapters.base import Adapter, ExecutionContext
from nixdots.core.models.action import Receipt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300


def run_command(
    adapter: str,
    action_id: str,
    argv: list[str],
    *,
    sudo: bool = False,
    stream: bool = False,
    timeout: int | None = DEFAULT_TIMEOUT,
    cwd: str | None = None,
) -> Receipt:
    """Run a command and capture the outcome as a Receipt.

    Args:
        adapter: Name recorded on the receipt.
        action_id: Action id recorded on the receipt.
        argv: Command and arguments.
        sudo: Prefix with ``sudo``. Password prompts go to the tty.
        stream: Let output flow to the terminal instead of capturing it.
            Used for long-running commands like ``nixos-rebuild``.
        timeout: Seconds before giving up, None for no limit.
        cwd: Working directory.
    """
    cmd = ["sudo", *argv] if sudo else list(argv)
    display = shlex.join(cmd)
    logger.debug("Executing: %s (cwd=%s)", display, cwd)
    start = time.monotonic()

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=not stream,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        return Receipt.failure(
            adapter=adapter,
            action_id=action_id,
            error=f"Command not found: {cmd[0]}",
            metadata={"command": display},
        )
    except subprocess.TimeoutExpired:
        return Receipt.failure(
            adapter=adapter,
            action_id=action_id,
            error=f"Command timed out after {timeout}s",
            metadata={"command": display, "timeout": timeout},
        )
    except Exception as e:
        logger.exception("Subprocess error: %s", display)
        return Receipt.failure(
            adapter=adapter,
            action_id=action_id,
            error=f"Command execution error: {e}",
            metadata={"command": display},
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)
    output = (result.stdout or "").strip()
    stderr = (result.stderr or "").strip()

    if result.returncode == 0:
        return Receipt.success(
            adapter=adapter,
            action_id=action_id,
            output=output,
            duration_ms=elapsed_ms,
            metadata={"command": display, "return_code": 0, "stderr": stderr},
        )

    logger.debug("%s exited with %d: %s", display, result.returncode, stderr)
    return Receipt.failure(
        adapter=adapter,
        action_id=action_id,
        error=stderr or f"Command exited with code {result.returncode}",
        duration_ms=elapsed_ms,
        metadata={"command": display, "return_code": result.returncode, "stdout": output},
    )


class ShellCommandAdapter(Adapter):
    """Run an arbitrary command.

    Action params:
        command (list[str] | str): The command to execute. Strings are
            split with shlex, never passed to a shell.
        stream (bool): Don't capture output (default: False).
        timeout (int): Timeout in seconds (default: 300).
        cwd (str): Override working directory (default: context.working_dir).
    """

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which("sh") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        command = context.action.params.get("command")
        if not command:
            return False, "Missing required param: 'command'"

        cwd = context.action.params.get("cwd", context.working_dir)
        if cwd and not Path(cwd).is_dir():
            return False, f"Working directory does not exist: {cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        command = context.action.params["command"]
        argv = shlex.split(command) if isinstance(command, str) else list(command)
        return run_command(
            self.name,
            context.action.id,
            argv,
            sudo=context.needs_sudo,
            stream=context.action.params.get("stream", False),
            timeout=context.action.params.get("timeout", DEFAULT_TIMEOUT),
            cwd=context.action.params.get("cwd", context.working_dir),
        )
