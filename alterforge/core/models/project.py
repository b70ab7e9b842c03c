"""
Project layout — the fixed shape of a scaffolded project.

A project is recognised by its directories, not by a metadata file:
``services/`` must exist, ``docker/docker-compose.yml`` holds the compose
manifest and ``.github/workflows/ci-cd.yml`` the CI workflow.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

COMPOSE_FILE = "docker/docker-compose.yml"
WORKFLOW_FILE = ".github/workflows/ci-cd.yml"


class ProjectLayout(BaseModel):
    """Well-known paths under a project root."""

    root: Path

    @property
    def docker_dir(self) -> Path:
        return self.root / "docker"

    @property
    def services_dir(self) -> Path:
        return self.root / "services"

    @property
    def workflows_dir(self) -> Path:
        return self.root / ".github" / "workflows"

    @property
    def compose_file(self) -> Path:
        return self.root / COMPOSE_FILE

    @property
    def workflow_file(self) -> Path:
        return self.root / WORKFLOW_FILE

    def service_dir(self, name: str) -> Path:
        """Directory of the service called *name*."""
        return self.services_dir / name

    def is_project(self) -> bool:
        """Whether the root looks like an alterforge project."""
        return self.services_dir.is_dir()

    def skeleton(self) -> list[Path]:
        """Directories ``init`` creates, parents first."""
        return [self.root, self.docker_dir, self.services_dir, self.workflows_dir]
