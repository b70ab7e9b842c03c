"""
Mock adapter — stands in for git, npm, npx and docker.

``alterforge --mock`` and the test-suite route every Action here, so a
project can be scaffolded end to end without any toolchain installed.
Each call is recorded; individual action IDs can be scripted to fail the
way the real tool would (non-zero exit status plus a message).
"""

from __future__ import annotations

from alterforge.adapters.base import Adapter, ExecutionContext
from alterforge.core.models.action import Receipt


class MockAdapter(Adapter):
    """Records tool calls and answers them from a script.

    Unscripted actions succeed with exit status 0.
    """

    def __init__(self, adapter_name: str = "mock", available: bool = True):
        self._name = adapter_name
        self._available = available
        self._scripted: dict[str, Receipt] = {}
        self._calls: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """Contexts received by ``execute``, oldest first."""
        return self._calls

    @property
    def call_count(self) -> int:
        return len(self._calls)

    @property
    def action_ids(self) -> list[str]:
        """IDs of executed actions, in call order."""
        return [ctx.action.id for ctx in self._calls]

    def calls_for(self, tool: str) -> list[ExecutionContext]:
        """Recorded calls whose Action targets *tool* ("git", "node", …)."""
        return [ctx for ctx in self._calls if ctx.action.adapter == tool]

    def is_available(self) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        """Answer *action_id* with *receipt*."""
        self._scripted[action_id] = receipt

    def set_failure(
        self,
        action_id: str,
        error: str = "Mock failure",
        return_code: int = 1,
    ) -> None:
        """Make *action_id* fail like a tool exiting with *return_code*."""
        self._scripted[action_id] = Receipt.failure(
            adapter=self._name,
            action_id=action_id,
            error=error,
            return_code=return_code,
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._calls.append(context)
        action = context.action

        scripted = self._scripted.get(action.id)
        if scripted is not None:
            return scripted

        return Receipt.success(
            adapter=self._name,
            action_id=action.id,
            output=f"[mock] {action.adapter}:{action.id}",
            return_code=0,
            metadata={"mock": True, "tool": action.adapter},
        )

    def reset(self) -> None:
        """Forget recorded calls and scripted answers."""
        self._calls.clear()
        self._scripted.clear()
