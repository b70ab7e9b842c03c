"""
Docker adapter — compose build / up for the project manifest.

Uses the ``docker compose`` CLI plugin — never the Docker API directly.
"""

from __future__ import annotations

import logging
import shutil

from alterforge.adapters.base import Adapter, ExecutionContext
from alterforge.adapters.shell.command import run_inherited
from alterforge.core.models.action import Receipt

logger = logging.getLogger(__name__)


class DockerAdapter(Adapter):
    """Docker Compose operations.

    Action params:
        operation (str): 'build' or 'up'.
        compose_file (str): Path to docker-compose.yml.
        detach (bool): Run ``up`` in the background (default: True).
        build (bool): Rebuild images on ``up`` (default: True).
        timeout (int): Timeout in seconds (default: none).
    """

    _OPERATIONS = {"build", "up"}

    @property
    def name(self) -> str:
        return "docker"

    def is_available(self) -> bool:
        return shutil.which("docker") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        params = context.action.params
        operation = params.get("operation", "")
        if operation not in self._OPERATIONS:
            return False, (
                f"Unknown operation '{operation}'. "
                f"Valid: {', '.join(sorted(self._OPERATIONS))}"
            )
        if not params.get("compose_file"):
            return False, "Missing required param: 'compose_file'"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        argv = ["docker", "compose", "-f", params["compose_file"], params["operation"]]

        if params["operation"] == "up":
            if params.get("detach", True):
                argv.append("-d")
            if params.get("build", True):
                argv.append("--build")

        return run_inherited(
            self.name,
            context.action.id,
            argv,
            cwd=context.working_dir,
            timeout=params.get("timeout"),
        )
