"""
Node.js adapter — npm install and frontend generators.

Frontend generators are reached through npx so nothing has to be
installed globally:

    React    npx create-react-app@latest <name>
    Angular  npx @angular/cli new <name> --defaults --skip-git
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from alterforge.adapters.base import Adapter, ExecutionContext
from alterforge.adapters.shell.command import run_inherited
from alterforge.core.models.action import Receipt

logger = logging.getLogger(__name__)

FRONTEND_COMMANDS: dict[str, list[str]] = {
    "React": ["npx", "create-react-app@latest", "{name}"],
    "Angular": ["npx", "@angular/cli", "new", "{name}", "--defaults", "--skip-git"],
}


def frontend_argv(framework: str, name: str) -> list[str]:
    """Generator command line for *framework* creating directory *name*."""
    return [part.format(name=name) for part in FRONTEND_COMMANDS[framework]]


class NodeAdapter(Adapter):
    """Node.js toolchain adapter.

    Action params:
        operation (str): 'install' or 'create-frontend'.
        package_manager (str): 'npm', 'yarn' or 'pnpm' (default: auto-detect).
        framework (str): 'React' or 'Angular' (for 'create-frontend').
        app_name (str): Directory to generate (for 'create-frontend').
        timeout (int): Timeout in seconds (default: none).
    """

    @property
    def name(self) -> str:
        return "node"

    def is_available(self) -> bool:
        return shutil.which("npm") is not None

    def _detect_package_manager(self, cwd: str) -> str:
        """Auto-detect the package manager from lock files."""
        cwd_path = Path(cwd)
        if (cwd_path / "pnpm-lock.yaml").exists():
            return "pnpm"
        if (cwd_path / "yarn.lock").exists():
            return "yarn"
        return "npm"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        params = context.action.params
        operation = params.get("operation", "")

        if operation == "install":
            if not Path(context.working_dir).is_dir():
                return False, f"Working directory does not exist: {context.working_dir}"
            return True, ""

        if operation == "create-frontend":
            framework = params.get("framework", "")
            if framework not in FRONTEND_COMMANDS:
                return False, (
                    f"Unknown framework '{framework}'. "
                    f"Valid: {', '.join(sorted(FRONTEND_COMMANDS))}"
                )
            if not params.get("app_name"):
                return False, "Missing required param: 'app_name'"
            return True, ""

        return False, f"Unknown operation '{operation}'. Valid: create-frontend, install"

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        timeout = params.get("timeout")

        if params["operation"] == "install":
            pm = params.get("package_manager") or self._detect_package_manager(
                context.working_dir
            )
            argv = [pm, "install"]
        else:
            argv = frontend_argv(params["framework"], params["app_name"])

        return run_inherited(
            self.name,
            context.action.id,
            argv,
            cwd=context.working_dir,
            timeout=timeout,
        )
