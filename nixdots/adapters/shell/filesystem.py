"""
Filesystem adapter — unprivileged file and directory operations.

Everything nixdots writes into the dotfiles directory goes through here,
so every write yields a receipt. Copies into the system config
directory need root and go through the shell adapter as ``sudo cp``.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from nixdots.adapters.base import Adapter, ExecutionContext
from nixdots.core.models.action import Receipt

logger = logging.getLogger(__name__)

_VALID_OPS = {"write", "mkdir", "copy"}


class FilesystemAdapter(Adapter):
    """File and directory operations with receipts.

    Action params:
        operation (str): One of 'write', 'mkdir', 'copy'.
        path (str): Target path (relative to working_dir or absolute).
        content (str): Content to write (for 'write').
        executable (bool): chmod 0755 after writing (for 'write').
        source (str): File to copy from (for 'copy').
    """

    @property
    def name(self) -> str:
        return "filesystem"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        params = context.action.params
        operation = params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"

        if operation not in _VALID_OPS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(_VALID_OPS))}"

        if not params.get("path"):
            return False, "Missing required param: 'path'"

        if operation == "write" and "content" not in params:
            return False, "Missing required param: 'content' for write operation"

        if operation == "copy" and not params.get("source"):
            return False, "Missing required param: 'source' for copy operation"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.action.params["operation"]
        target = self._resolve(context, context.action.params["path"])

        try:
            if operation == "write":
                return self._write(context, target)
            elif operation == "mkdir":
                return self._mkdir(context, target)
            elif operation == "copy":
                return self._copy(context, target)
            else:
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=f"Unknown operation: {operation}",
                )
        except Exception as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Filesystem error: {e}",
                metadata={"operation": operation, "path": str(target)},
            )

    @staticmethod
    def _resolve(ctx: ExecutionContext, raw_path: str) -> Path:
        target = Path(raw_path).expanduser()
        if not target.is_absolute():
            target = Path(ctx.working_dir) / target
        return target

    def _write(self, ctx: ExecutionContext, target: Path) -> Receipt:
        content = ctx.action.params["content"]
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        if ctx.action.params.get("executable"):
            target.chmod(0o755)
        logger.debug("Wrote %s (%d bytes)", target, len(content))
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Written {len(content)} bytes to {target}",
            metadata={"path": str(target), "size": len(content)},
        )

    def _mkdir(self, ctx: ExecutionContext, target: Path) -> Receipt:
        target.mkdir(parents=True, exist_ok=True)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Directory created: {target}",
            metadata={"path": str(target)},
        )

    def _copy(self, ctx: ExecutionContext, target: Path) -> Receipt:
        source = self._resolve(ctx, ctx.action.params["source"])
        if not source.is_file():
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error=f"File not found: {source}",
            )
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Copied {source} to {target}",
            metadata={"source": str(source), "path": str(target)},
        )
