"""
CLI commands for Docker Compose — up, build.

Thin wrappers over ``alterforge.core.services.scaffold_ops``. The exit
status of ``docker compose`` becomes the exit status of the command.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click


def _run_compose(ctx: click.Context, operation: str) -> None:
    from alterforge.core.errors import ExternalToolError, ScaffoldError
    from alterforge.core.services.scaffold_ops import compose_build, compose_up

    runner = compose_up if operation == "up" else compose_build
    try:
        runner(Path.cwd(), registry=ctx.obj["registry"])
    except ExternalToolError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(e.return_code or 1)
    except ScaffoldError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@click.command("up")
@click.pass_context
def up(ctx: click.Context) -> None:
    """Run all services using Docker Compose."""
    click.secho("🚀 Starting Docker containers...", fg="yellow")
    _run_compose(ctx, "up")


@click.command("build")
@click.pass_context
def build(ctx: click.Context) -> None:
    """Build all Docker services."""
    click.secho("🔨 Building Docker images...", fg="yellow")
    _run_compose(ctx, "build")
