"""
Action and Receipt models — the contract with external tools.

Every call to git, npm, npx or docker is described by an Action and
answered by a Receipt. Adapters return Receipts, never exceptions, so the
scaffold orchestrator decides on its own whether a failure is fatal
(``docker compose up``) or only worth a warning (``npm install``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

Status = Literal["ok", "skipped", "failed"]


class Action(BaseModel):
    """A requested call to an external tool.

    ``adapter`` picks the tool binding, ``params`` carry the operation
    and its arguments (see each adapter's docstring).
    """

    id: str                         # e.g. "git-init", "npm-install:auth"
    name: str = ""                  # human-readable label
    adapter: str                    # "git", "node", "docker"
    params: dict[str, Any] = Field(default_factory=dict)
    for_service: str | None = None  # None = project-wide


class Receipt(BaseModel):
    """Outcome of one tool call.

    ``return_code`` is the tool's exit status when a process actually ran;
    it stays None for failures detected before that (validation, no
    adapter registered).
    """

    adapter: str
    action_id: str
    status: Status = "ok"
    duration_ms: int = 0

    output: str = ""
    error: str | None = None
    return_code: int | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def exit_code(self) -> int:
        """Process-style exit status: the tool's own code, else 0/1."""
        if self.return_code is not None:
            return self.return_code
        return 1 if self.failed else 0

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, output=output, **kwargs)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **kwargs: Any) -> Receipt:
        return cls(
            adapter=adapter, action_id=action_id, status="failed", error=error, **kwargs
        )

    @classmethod
    def skip(cls, adapter: str, action_id: str, reason: str = "", **kwargs: Any) -> Receipt:
        """Validated but not run (dry-run)."""
        return cls(
            adapter=adapter, action_id=action_id, status="skipped", output=reason, **kwargs
        )
