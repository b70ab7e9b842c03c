"""
Adapter base — the protocol contract between the scaffolder and tools.

The scaffold orchestrator never spawns git, npm, npx or docker itself; it
describes the call as an Action and hands it to an adapter through the
AdapterRegistry. Adapters return Receipts and never raise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from alterforge.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action."""

    action: Action
    working_dir: str = "."          # where the tool runs (project root or service dir)
    dry_run: bool = False
    params: dict[str, Any] = Field(default_factory=dict)


class Adapter(ABC):
    """Binding for one external tool (git, npm/npx or docker compose).

    The registry dispatches an Action to the adapter whose ``name`` equals
    ``Action.adapter``, calling ``validate`` first and ``execute`` only when
    it passes.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Value of ``Action.adapter`` this binding answers to."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the tool's executable is on PATH. Must not raise."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Check the Action's params before anything runs.

        Returns:
            (valid, reason); reason is empty when valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Run the tool. Failures come back as a failed Receipt, never raised."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
