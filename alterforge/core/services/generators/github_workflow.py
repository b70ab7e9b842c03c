"""
GitHub Actions workflow generator — .github/workflows/ci-cd.yml.

One ``build`` job runs once per service through ``matrix.service``:
install, test placeholder, docker build, registry login, push. The
matrix list is later extended in place by ``workflow_matrix``.
"""

from __future__ import annotations

from alterforge.core.models.template import GeneratedFile


def _format_matrix(services: list[str]) -> str:
    return f"[{', '.join(services)}]"


def generate_ci_cd(
    services: list[str] | None = None,
    *,
    node_version: str = "18",
    registry: str = "ghcr.io",
) -> GeneratedFile:
    """Generate the CI/CD workflow.

    Args:
        services: Initial matrix list (default: ``["core"]``).
        node_version: Node.js version for actions/setup-node.
        registry: Container registry host images are pushed to.

    Returns:
        GeneratedFile at ``.github/workflows/ci-cd.yml``.
    """
    matrix = _format_matrix(services or ["core"])
    image = f"{registry}/${{{{ github.repository_owner }}}}/${{{{ matrix.service }}}}:latest"

    content = f"""\
name: CI/CD Pipeline

on:
  push:
    branches: [ "main" ]
  pull_request:
    branches: [ "main" ]

jobs:
  build:
    runs-on: ubuntu-latest
    strategy:
      matrix:
        service: {matrix}
    steps:
      - name: Checkout code
        uses: actions/checkout@v4

      - name: Set up Node.js
        uses: actions/setup-node@v4
        with:
          node-version: '{node_version}'

      - name: Install dependencies
        run: |
          cd services/${{{{ matrix.service }}}}
          npm install

      - name: Run tests
        run: echo "🧪 Tests placeholder - add Jest or Mocha here"

      - name: Build Docker image
        run: |
          docker build -t {image} services/${{{{ matrix.service }}}}

      - name: Login to GitHub Container Registry
        uses: docker/login-action@v3
        with:
          registry: {registry}
          username: ${{{{ github.repository_owner }}}}
          password: ${{{{ secrets.GITHUB_TOKEN }}}}

      - name: Push Docker image
        run: docker push {image}
"""

    return GeneratedFile(
        path=".github/workflows/ci-cd.yml",
        content=content,
        reason=f"CI/CD workflow for services: {matrix}",
    )
