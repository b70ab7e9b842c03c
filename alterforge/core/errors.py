"""
Scaffold errors — conditions that abort the current command.

Raised by the core, caught only by the CLI, which reports the message and
exits non-zero. Nothing is rolled back: a half-created directory may be
left behind.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for fatal scaffold errors."""


class AlreadyExistsError(ScaffoldError):
    """Target project or service directory is already present, or the service name is taken."""

    def __init__(self, path: Path, what: str = "Folder", detail: str = ""):
        self.path = path
        message = f"{what} {path.name} already exists."
        if detail:
            message += f" {detail}"
        super().__init__(message)


class NotAProjectError(ScaffoldError):
    """Expected project structure (``services/``) is missing."""

    def __init__(self, root: Path):
        self.root = root
        super().__init__(
            f"Not a valid alterforge project (missing services/ folder in {root})."
        )


class MissingManifestError(ScaffoldError):
    """Compose document is absent for ``up``/``build``."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"docker-compose.yml not found at {path}.")


class ExternalToolError(ScaffoldError):
    """A required external tool exited non-zero."""

    def __init__(self, action_id: str, return_code: int, detail: str = ""):
        self.action_id = action_id
        self.return_code = return_code
        message = f"{action_id} failed with exit code {return_code}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
