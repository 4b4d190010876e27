"""
Mock adapter — universal test double for all adapter operations.

Stands in for the nix, git or shell adapter so the workflow can be
exercised without touching the system. Configurable per action id:
a fixed response, a failure, or a queue of responses consumed in order
(e.g. a home-manager probe that fails, then succeeds after install).
"""

from __future__ import annotations

from collections import defaultdict, deque

from nixdots.adapters.base import Adapter, ExecutionContext
from nixdots.core.models.action import Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default, returns success for everything.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._queued: dict[str, deque[Receipt]] = defaultdict(deque)
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    def calls_for(self, action_id: str) -> list[ExecutionContext]:
        """Execution contexts received for one action id."""
        return [c for c in self._call_log if c.action.id == action_id]

    def is_available(self) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific action ID."""
        self._responses[action_id] = receipt

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Configure a specific action to fail."""
        self._responses[action_id] = Receipt.failure(
            adapter=self._name,
            action_id=action_id,
            error=error,
        )

    def queue_outcomes(self, action_id: str, *outcomes: bool) -> None:
        """Queue success (True) / failure (False) results for an action id.

        Queued results are used first, one per call; afterwards the fixed
        response (or the default success) applies again.
        """
        for ok in outcomes:
            if ok:
                receipt = Receipt.success(adapter=self._name, action_id=action_id)
            else:
                receipt = Receipt.failure(
                    adapter=self._name, action_id=action_id, error="Mock failure"
                )
            self._queued[action_id].append(receipt)

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)
        action_id = context.action.id

        if self._queued[action_id]:
            return self._queued[action_id].popleft()

        if action_id in self._responses:
            return self._responses[action_id]

        return Receipt.success(
            adapter=self._name,
            action_id=action_id,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
        self._queued.clear()
