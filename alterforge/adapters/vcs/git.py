"""
Git adapter — the initial version-control checkpoint of a new project.

Uses the git CLI. Output goes straight to the terminal.
"""

from __future__ import annotations

import logging
import shutil

from alterforge.adapters.base import Adapter, ExecutionContext
from alterforge.adapters.shell.command import run_inherited
from alterforge.core.models.action import Receipt

logger = logging.getLogger(__name__)


class GitAdapter(Adapter):
    """Git operations.

    Action params:
        operation (str): One of 'init', 'add', 'commit'.
        paths (list[str]): Paths to stage (for 'add', default: ["."]).
        message (str): Commit message (for 'commit').
        timeout (int): Timeout in seconds (default: 60).
    """

    _OPERATIONS = {"init", "add", "commit"}

    @property
    def name(self) -> str:
        return "git"

    def is_available(self) -> bool:
        return shutil.which("git") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.action.params.get("operation", "")
        if operation not in self._OPERATIONS:
            return False, (
                f"Unknown operation '{operation}'. "
                f"Valid: {', '.join(sorted(self._OPERATIONS))}"
            )

        if operation == "commit" and not context.action.params.get("message"):
            return False, "Missing required param: 'message' for commit operation"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        operation = params["operation"]

        if operation == "init":
            args = ["init"]
        elif operation == "add":
            args = ["add", *(params.get("paths") or ["."])]
        else:
            args = ["commit", "-m", params["message"]]

        return run_inherited(
            self.name,
            context.action.id,
            ["git", *args],
            cwd=context.working_dir,
            timeout=params.get("timeout", 60),
        )
