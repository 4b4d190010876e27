"""
Git adapter — version control for the dotfiles directory.

Only what the workflow needs: create the repository on first setup
and snapshot it after a forced sync.
"""

from __future__ import annotations

import logging
import shutil

from nixdots.adapters.base import Adapter, ExecutionContext
from nixdots.adapters.shell.command import run_command
from nixdots.core.models.action import Receipt

logger = logging.getLogger(__name__)

_NOTHING_TO_COMMIT = ("nothing to commit", "nothing added to commit")


class GitAdapter(Adapter):
    """Git version control operations.

    Action params:
        operation (str): One of 'init', 'commit'.
        message (str): Commit message (for 'commit').
        timeout (int): Timeout in seconds (default: 30).
    """

    @property
    def name(self) -> str:
        return "git"

    def is_available(self) -> bool:
        return shutil.which("git") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.action.params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"

        valid_ops = {"init", "commit"}
        if operation not in valid_ops:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(valid_ops))}"

        if operation == "commit" and not context.action.params.get("message"):
            return False, "Missing required param: 'message' for commit operation"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.action.params["operation"]
        if operation == "init":
            return self._git(context, ["init"])
        if operation == "commit":
            return self._commit(context)
        return Receipt.failure(
            adapter=self.name,
            action_id=context.action.id,
            error=f"Unknown operation: {operation}",
        )

    def _commit(self, ctx: ExecutionContext) -> Receipt:
        """Stage everything and commit; an unchanged tree is a skip, not a failure."""
        staged = self._git(ctx, ["add", "-A"])
        if staged.failed:
            return staged

        receipt = self._git(ctx, ["commit", "-m", ctx.action.params["message"]])
        if receipt.failed:
            stdout = receipt.metadata.get("stdout", "")
            if any(marker in stdout for marker in _NOTHING_TO_COMMIT):
                return Receipt.skip(
                    adapter=self.name,
                    action_id=ctx.action.id,
                    reason="Nothing to commit",
                )
        return receipt

    def _git(self, ctx: ExecutionContext, args: list[str]) -> Receipt:
        return run_command(
            self.name,
            ctx.action.id,
            ["git", *args],
            timeout=ctx.action.params.get("timeout", 30),
            cwd=ctx.working_dir,
        )
