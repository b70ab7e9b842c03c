"""
alterforge — CLI entrypoint.

Usage:
    alterforge --help
    alterforge init shop
    alterforge add-service auth -f REST
    alterforge up
    alterforge doctor
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from alterforge import __version__
from alterforge.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    LOG_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="alterforge")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option("--mock", is_flag=True, help="Use mock adapters (no git, npm or docker).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to alterforge.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    mock: bool,
    config_path: str | None,
) -> None:
    """Scaffold modular microservices with Node.js, GraphQL, gRPC, Sequelize, Docker and CI/CD."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get(LOG_LEVEL_ENV),
        ),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )

    from alterforge.core.config.loader import ConfigError, load_settings

    try:
        ctx.obj["settings"] = load_settings(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    # Tests inject their own registry through ``obj``
    if "registry" not in ctx.obj:
        from alterforge.adapters.registry import default_registry

        ctx.obj["registry"] = default_registry(mock_mode=mock)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def doctor(ctx: click.Context, as_json: bool) -> None:
    """Check that the tools the scaffolder drives are on PATH."""
    status = ctx.obj["registry"].adapter_status()
    missing = [name for name, info in status.items() if not info["available"]]

    if as_json:
        click.echo(json.dumps(status, indent=2))
        sys.exit(1 if missing else 0)

    for name, info in status.items():
        if info["available"]:
            click.secho(f"   ✅ {name}", fg="green")
        else:
            click.secho(f"   ❌ {name} not found", fg="red")

    if missing:
        click.echo()
        click.secho(f"⚠️  Missing: {', '.join(missing)}", fg="yellow")
        sys.exit(1)


# ── Register sub-commands from alterforge/ui/cli/ ─────────────────

from alterforge.ui.cli.docker import build, up
from alterforge.ui.cli.project import add_frontend, add_service, init

cli.add_command(init)
cli.add_command(add_service)
cli.add_command(add_frontend)
cli.add_command(up)
cli.add_command(build)


if __name__ == "__main__":
    cli()
