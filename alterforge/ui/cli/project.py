"""
CLI commands for project scaffolding — init, add-service, add-frontend.

Thin wrappers over ``alterforge.core.services.scaffold_ops``. Every choice
is collected here (options first, interactive prompts for the rest)
before any file is written.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from alterforge.core.models.service import Database, Feature, Frontend
from alterforge.core.models.settings import Settings

_FEATURE_CHOICE = click.Choice([f.value for f in Feature], case_sensitive=False)
_DATABASE_CHOICE = click.Choice([d.value for d in Database], case_sensitive=False)
_FRONTEND_CHOICE = click.Choice([f.value for f in Frontend], case_sensitive=False)


def _resolve_project_root() -> Path:
    """Commands operate on the current working directory."""
    return Path.cwd()


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj.get("settings") or Settings()


def _as_database(value: str) -> Database:
    return next(d for d in Database if d.value.lower() == value.lower())


def _as_frontend(value: str) -> Frontend:
    return next(f for f in Frontend if f.value.lower() == value.lower())


# ── Prompts ─────────────────────────────────────────────────────


def _choose_features(name: str, given: tuple[str, ...], settings: Settings) -> list[Feature]:
    from alterforge.core.services.features import normalize_features

    if given:
        return normalize_features(given)

    default = ", ".join(f.value for f in settings.default_features)
    answer = click.prompt(
        f"Select features for {name} service "
        f"({', '.join(f.value for f in Feature)}; comma-separated)",
        default=default,
    )
    return normalize_features(answer.split(","))


def _choose_database(
    message: str,
    given: str | None,
    settings: Settings,
    default: Database | None = None,
) -> Database:
    if given:
        return _as_database(given)
    answer = click.prompt(
        message,
        type=_DATABASE_CHOICE,
        default=(default or settings.default_database).value,
    )
    return _as_database(answer)


def _choose_frontend(given: str | None) -> Frontend:
    if given:
        return _as_frontend(given)
    answer = click.prompt(
        "Do you want to include a frontend for this service?",
        type=_FRONTEND_CHOICE,
        default=Frontend.NONE.value,
    )
    return _as_frontend(answer)


def _service_options(
    name: str,
    *,
    features: tuple[str, ...],
    database: str | None,
    frontend: str | None,
    port: int | None,
    settings: Settings,
    default_database: Database | None = None,
):
    from alterforge.core.services.scaffold_ops import ServiceOptions

    selected = _choose_features(name, features, settings)
    chosen_db = None
    if Feature.SEQUELIZE in selected:
        chosen_db = _choose_database(
            "Select your database", database, settings, default=default_database
        )
    return ServiceOptions(
        name=name,
        features=selected,
        database=chosen_db,
        frontend=_choose_frontend(frontend),
        port=port,
    )


# ── Output ──────────────────────────────────────────────────────


def _report(result, quiet: bool) -> None:
    for service in result.services:
        click.secho(
            f"✅ Service {service.name} created with dependencies and added to CI/CD.",
            fg="green",
        )
        if not quiet:
            features = ", ".join(f.value for f in service.features) or "none"
            click.echo(f"   Port: {service.port}  Features: {features}")
            if service.database:
                click.echo(f"   Database: {service.database.value} ({service.database_service})")
    for warning in result.warnings:
        click.secho(f"⚠️  {warning}", fg="yellow")


def _fail(err: Exception | str) -> None:
    click.secho(f"❌ {err}", fg="red")
    sys.exit(1)


# ── Commands ────────────────────────────────────────────────────


_service_option_decorators = [
    click.option(
        "--feature", "-f", "features", multiple=True, type=_FEATURE_CHOICE,
        help="Feature to include (repeatable). Prompted when omitted.",
    ),
    click.option("--frontend", type=_FRONTEND_CHOICE, default=None, help="Frontend generator."),
    click.option("--port", type=click.IntRange(1, 65535), default=None, help="Fixed service port."),
]


def _service_options_decorator(func):
    for decorator in reversed(_service_option_decorators):
        func = decorator(func)
    return func


@click.command("init")
@click.argument("project_name")
@click.option("--database", type=_DATABASE_CHOICE, default=None, help="Default project database.")
@click.option(
    "--core-database", type=_DATABASE_CHOICE, default=None,
    help="Database of the core service (when Sequelize is selected).",
)
@_service_options_decorator
@click.option("--up/--no-up", "start", default=True, help="Start containers after scaffolding.")
@click.pass_context
def init(
    ctx: click.Context,
    project_name: str,
    database: str | None,
    core_database: str | None,
    features: tuple[str, ...],
    frontend: str | None,
    port: int | None,
    start: bool,
) -> None:
    """Initialize a new microservice project with GitHub Actions CI/CD."""
    from alterforge.core.errors import ScaffoldError
    from alterforge.core.services.scaffold_ops import CORE_SERVICE, init_project

    parent = _resolve_project_root()
    settings = _settings(ctx)
    quiet = ctx.obj.get("quiet", False)

    if (parent / project_name).exists():
        _fail(f"Folder {project_name} already exists.")

    project_db = _choose_database(
        "Select the default database for your project", database, settings
    )
    core = _service_options(
        CORE_SERVICE,
        features=features,
        database=core_database,
        frontend=frontend,
        port=port,
        settings=settings,
        default_database=project_db,
    )

    click.secho(f"🚀 Initializing project: {project_name}...", fg="blue")
    try:
        result = init_project(
            parent,
            project_name,
            database=project_db,
            core=core,
            registry=ctx.obj["registry"],
            settings=settings,
            start_containers=start,
        )
    except ScaffoldError as e:
        _fail(e)
        return

    _report(result, quiet)
    click.secho(f"✅ Project {project_name} initialized with GitHub CI/CD!", fg="green")
    if not quiet:
        click.secho(f"👉 cd {project_name} && alterforge add-service auth", fg="yellow")


@click.command("add-service")
@click.argument("service_name")
@_service_options_decorator
@click.option(
    "--database", type=_DATABASE_CHOICE, default=None,
    help="Database (when Sequelize is selected).",
)
@click.pass_context
def add_service(
    ctx: click.Context,
    service_name: str,
    features: tuple[str, ...],
    frontend: str | None,
    port: int | None,
    database: str | None,
) -> None:
    """Add a new service and update compose and CI/CD."""
    from alterforge.core.errors import NotAProjectError, ScaffoldError
    from alterforge.core.models.project import ProjectLayout
    from alterforge.core.services.scaffold_ops import add_service as _add_service
    from alterforge.core.services.scaffold_ops import check_service_name

    root = _resolve_project_root()
    layout = ProjectLayout(root=root)
    settings = _settings(ctx)

    # Fail before prompting
    if not layout.is_project():
        _fail(NotAProjectError(root))
    try:
        check_service_name(layout, service_name)
    except ScaffoldError as e:
        _fail(e)

    options = _service_options(
        service_name,
        features=features,
        database=database,
        frontend=frontend,
        port=port,
        settings=settings,
    )

    click.secho(f"⚙️  Creating service: {service_name}...", fg="blue")
    try:
        result = _add_service(root, options, registry=ctx.obj["registry"], settings=settings)
    except ScaffoldError as e:
        _fail(e)
        return

    _report(result, ctx.obj.get("quiet", False))


@click.command("add-frontend")
@click.argument("name")
@click.option("--framework", type=_FRONTEND_CHOICE, default=None, help="Frontend generator.")
@click.pass_context
def add_frontend(ctx: click.Context, name: str, framework: str | None) -> None:
    """Generate a React or Angular frontend named <NAME>-frontend."""
    from alterforge.core.errors import NotAProjectError, ScaffoldError
    from alterforge.core.models.project import ProjectLayout
    from alterforge.core.services.scaffold_ops import add_frontend as _add_frontend

    root = _resolve_project_root()
    if not ProjectLayout(root=root).is_project():
        _fail(NotAProjectError(root))

    chosen = _choose_frontend(framework)
    try:
        result = _add_frontend(root, name, chosen, registry=ctx.obj["registry"])
    except ScaffoldError as e:
        _fail(e)
        return

    for warning in result.warnings:
        click.secho(f"⚠️  {warning}", fg="yellow")
    if chosen != Frontend.NONE and not result.warnings:
        click.secho(f"✅ {chosen.value} frontend created: {name}-frontend", fg="green")
