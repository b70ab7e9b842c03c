"""
Scaffold operations — init, add-service, add-frontend, up, build.

Channel-independent: the CLI collects every choice up front, then calls
these functions. Each service is planned completely (features, port,
files, new compose and workflow text) before anything is written.

Fatal conditions raise ScaffoldError subclasses. External tools go
through the AdapterRegistry; failures of optional steps (git checkpoint,
frontend generator, dependency install) become warnings on the result.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path

from alterforge.adapters.registry import AdapterRegistry
from alterforge.core.errors import (
    AlreadyExistsError,
    ExternalToolError,
    MissingManifestError,
    NotAProjectError,
)
from alterforge.core.models.action import Action, Receipt
from alterforge.core.models.project import ProjectLayout
from alterforge.core.models.service import (
    DATABASE_PROFILES,
    Database,
    Feature,
    Frontend,
    ServiceDescriptor,
)
from alterforge.core.models.settings import Settings
from alterforge.core.models.template import GeneratedFile
from alterforge.core.services.compose_splice import (
    add_application_service,
    declared_services,
)
from alterforge.core.services.features import resolve_features
from alterforge.core.services.generators.compose import generate_compose
from alterforge.core.services.generators.dockerfile import generate_dockerfile
from alterforge.core.services.generators.github_workflow import generate_ci_cd
from alterforge.core.services.generators.lint_config import generate_lint_configs
from alterforge.core.services.generators.node_service import (
    generate_env,
    generate_index,
    generate_package_json,
)
from alterforge.core.services.ports import allocate_port
from alterforge.core.services.workflow_matrix import add_to_matrix

logger = logging.getLogger(__name__)

CORE_SERVICE = "core"
INITIAL_COMMIT_MESSAGE = "Initial alterforge setup with CI/CD"


# ═══════════════════════════════════════════════════════════════════
#  Result types
# ═══════════════════════════════════════════════════════════════════


@dataclass
class ServiceOptions:
    """Everything the user chose for one service."""

    name: str
    features: list[Feature] = field(default_factory=list)
    database: Database | None = None
    frontend: Frontend = Frontend.NONE
    port: int | None = None


@dataclass
class ServicePlan:
    """A fully planned service: nothing has been written yet.

    ``compose`` / ``workflow`` hold the new document text, or None when
    the project has no such document.
    """

    service: ServiceDescriptor
    files: list[GeneratedFile]
    compose: str | None = None
    workflow: str | None = None


@dataclass
class ScaffoldResult:
    """Outcome of a scaffold command."""

    root: Path
    services: list[ServiceDescriptor] = field(default_factory=list)
    receipts: list[Receipt] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "root": str(self.root),
            "services": [s.model_dump(mode="json") for s in self.services],
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
            "warnings": list(self.warnings),
        }


# ═══════════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════════


def write_generated_file(base: Path, file: GeneratedFile) -> Path:
    """Write a GeneratedFile under *base*, creating parent directories.

    An existing file is only replaced when ``file.overwrite`` is set;
    otherwise it is left alone and a warning is logged.
    """
    target = file.target(base)
    if target.exists() and not file.overwrite:
        logger.warning("File already exists, not overwriting: %s", target)
        return target

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(file.content, encoding="utf-8")
    logger.info("Wrote %s (%s)", target, file.reason)
    return target


def _run_optional(
    registry: AdapterRegistry,
    result: ScaffoldResult,
    action: Action,
    *,
    cwd: Path,
    warning: str,
) -> Receipt:
    """Execute *action*; a failure is recorded as a warning, not raised."""
    receipt = registry.execute_action(action, working_dir=str(cwd))
    result.receipts.append(receipt)
    if receipt.failed:
        result.warnings.append(f"{warning} ({receipt.error})")
        logger.warning("%s: %s", warning, receipt.error)
    return receipt


def _read(path: Path) -> str | None:
    return path.read_text(encoding="utf-8") if path.is_file() else None


# ═══════════════════════════════════════════════════════════════════
#  Planning (no side effects)
# ═══════════════════════════════════════════════════════════════════


def check_service_name(layout: ProjectLayout, name: str) -> None:
    """Refuse a service name that is already taken in the project.

    Taken means ``services/<name>`` exists, the compose manifest already
    declares a service of that name, or the name belongs to a database
    backing service (``db``, ``mysql``) that Sequelize services rely on.

    Raises:
        AlreadyExistsError: *name* cannot be used.
    """
    service_dir = layout.service_dir(name)
    if service_dir.exists():
        raise AlreadyExistsError(service_dir, what="Service")

    for profile in DATABASE_PROFILES.values():
        if name == profile.service_name:
            raise AlreadyExistsError(
                service_dir,
                what="Service",
                detail=f"The name is reserved for the {profile.kind.value} backing service.",
            )

    compose = _read(layout.compose_file)
    if compose is not None and name in declared_services(compose):
        raise AlreadyExistsError(
            service_dir, what="Service", detail=f"It is declared in {layout.compose_file.name}."
        )


def plan_service(
    layout: ProjectLayout,
    options: ServiceOptions,
    *,
    settings: Settings | None = None,
    rng: random.Random | None = None,
) -> ServicePlan:
    """Resolve features, pick a port and render every file of a service.

    Reads the current compose/workflow documents but writes nothing.
    """
    settings = settings or Settings()
    resolved = resolve_features(options.name, options.features, options.database)
    port = options.port if options.port is not None else allocate_port(
        rng, settings.port_range
    )

    service = ServiceDescriptor(
        name=options.name,
        features=[f for f in Feature if f in options.features],
        database=resolved.database,
        port=port,
        dependencies=resolved.dependencies,
        dev_dependencies=resolved.dev_dependencies,
        connection_string=resolved.connection_string,
    )

    files = [
        generate_package_json(service),
        generate_env(service),
        generate_index(service),
        *resolved.files,
        generate_dockerfile(service, node_version=settings.node_version),
    ]

    compose = _read(layout.compose_file)
    if compose is not None:
        compose = add_application_service(compose, service)

    workflow = _read(layout.workflow_file)
    if workflow is not None:
        workflow = add_to_matrix(workflow, service.name)

    return ServicePlan(service=service, files=files, compose=compose, workflow=workflow)


# ═══════════════════════════════════════════════════════════════════
#  Commands
# ═══════════════════════════════════════════════════════════════════


def _create_service(
    layout: ProjectLayout,
    options: ServiceOptions,
    registry: AdapterRegistry,
    result: ScaffoldResult,
    *,
    settings: Settings,
    rng: random.Random | None,
) -> ServiceDescriptor:
    check_service_name(layout, options.name)
    service_dir = layout.service_dir(options.name)

    plan = plan_service(layout, options, settings=settings, rng=rng)
    service = plan.service
    logger.info("Creating service %s on port %d", service.name, service.port)

    (service_dir / "src" / "models").mkdir(parents=True)
    for file in plan.files:
        write_generated_file(service_dir, file)

    if plan.compose is not None:
        layout.compose_file.write_text(plan.compose, encoding="utf-8")
    else:
        result.warnings.append(
            f"{layout.compose_file} not found; {service.name} was not added to compose"
        )

    if plan.workflow is not None:
        layout.workflow_file.write_text(plan.workflow, encoding="utf-8")

    if options.frontend != Frontend.NONE:
        _run_frontend(layout, service.name, options.frontend, registry, result)

    _run_optional(
        registry,
        result,
        Action(
            id=f"npm-install:{service.name}",
            name=f"Install dependencies for {service.name}",
            adapter="node",
            params={"operation": "install"},
            for_service=service.name,
        ),
        cwd=service_dir,
        warning=f"Dependency install failed for {service.name}",
    )

    result.services.append(service)
    return service


def _run_frontend(
    layout: ProjectLayout,
    name: str,
    framework: Frontend,
    registry: AdapterRegistry,
    result: ScaffoldResult,
) -> Receipt:
    return _run_optional(
        registry,
        result,
        Action(
            id=f"frontend:{name}",
            name=f"{framework.value} frontend for {name}",
            adapter="node",
            params={
                "operation": "create-frontend",
                "framework": framework.value,
                "app_name": f"{name}-frontend",
            },
            for_service=name,
        ),
        cwd=layout.root,
        warning=f"{framework.value} setup failed",
    )


def add_service(
    root: Path,
    options: ServiceOptions,
    *,
    registry: AdapterRegistry,
    settings: Settings | None = None,
    rng: random.Random | None = None,
) -> ScaffoldResult:
    """Add a service to the project at *root*.

    Raises:
        NotAProjectError: ``services/`` is missing.
        AlreadyExistsError: ``services/<name>`` already exists; nothing
            is modified in that case.
    """
    layout = ProjectLayout(root=root)
    if not layout.is_project():
        raise NotAProjectError(root)

    result = ScaffoldResult(root=root)
    _create_service(
        layout, options, registry, result, settings=settings or Settings(), rng=rng
    )
    return result


def init_project(
    parent: Path,
    name: str,
    *,
    database: Database,
    core: ServiceOptions,
    registry: AdapterRegistry,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    start_containers: bool = False,
) -> ScaffoldResult:
    """Create project *name* under *parent*, with a ``core`` service.

    Writes the compose manifest (with the *database* backing service),
    the CI workflow, lint configs, commits once, then creates ``core``.

    Raises:
        AlreadyExistsError: ``<parent>/<name>`` already exists.
    """
    settings = settings or Settings()
    layout = ProjectLayout(root=parent / name)
    if layout.root.exists():
        raise AlreadyExistsError(layout.root)

    logger.info("Initializing project %s at %s", name, layout.root)
    for directory in layout.skeleton():
        directory.mkdir(parents=True, exist_ok=True)

    project_files = [
        generate_compose(database),
        generate_ci_cd(
            [CORE_SERVICE],
            node_version=settings.node_version,
            registry=settings.registry,
        ),
        *generate_lint_configs(),
    ]
    for file in project_files:
        write_generated_file(layout.root, file)

    result = ScaffoldResult(root=layout.root)

    checkpoint = [
        Action(id="git-init", adapter="git", params={"operation": "init"}),
        Action(id="git-add", adapter="git", params={"operation": "add", "paths": ["."]}),
        Action(
            id="git-commit",
            adapter="git",
            params={"operation": "commit", "message": INITIAL_COMMIT_MESSAGE},
        ),
    ]
    for action in checkpoint:
        receipt = _run_optional(
            registry,
            result,
            action,
            cwd=layout.root,
            warning=f"Git checkpoint step '{action.id}' failed",
        )
        if receipt.failed:
            break

    core_options = ServiceOptions(
        name=CORE_SERVICE,
        features=core.features,
        database=core.database,
        frontend=core.frontend,
        port=core.port,
    )
    _create_service(layout, core_options, registry, result, settings=settings, rng=rng)

    if start_containers:
        _run_optional(
            registry,
            result,
            _compose_action("up", layout),
            cwd=layout.root,
            warning="Starting Docker containers failed",
        )

    return result


def add_frontend(
    root: Path,
    name: str,
    framework: Frontend,
    *,
    registry: AdapterRegistry,
) -> ScaffoldResult:
    """Generate ``<name>-frontend`` at the project root with *framework*.

    Raises:
        NotAProjectError: ``services/`` is missing.
    """
    layout = ProjectLayout(root=root)
    if not layout.is_project():
        raise NotAProjectError(root)

    result = ScaffoldResult(root=root)
    if framework == Frontend.NONE:
        logger.info("No frontend selected for %s", name)
        return result

    _run_frontend(layout, name, framework, registry, result)
    return result


def _compose_action(operation: str, layout: ProjectLayout) -> Action:
    return Action(
        id=f"compose-{operation}",
        adapter="docker",
        params={"operation": operation, "compose_file": str(layout.compose_file)},
    )


def compose_up(root: Path, *, registry: AdapterRegistry) -> Receipt:
    """``docker compose -f docker/docker-compose.yml up -d --build``.

    Raises:
        MissingManifestError: the compose document does not exist.
        ExternalToolError: docker compose exited non-zero.
    """
    return _compose(root, "up", registry)


def compose_build(root: Path, *, registry: AdapterRegistry) -> Receipt:
    """``docker compose -f docker/docker-compose.yml build``.

    Raises:
        MissingManifestError: the compose document does not exist.
        ExternalToolError: docker compose exited non-zero.
    """
    return _compose(root, "build", registry)


def _compose(root: Path, operation: str, registry: AdapterRegistry) -> Receipt:
    layout = ProjectLayout(root=root)
    if not layout.compose_file.is_file():
        raise MissingManifestError(layout.compose_file)

    receipt = registry.execute_action(_compose_action(operation, layout), working_dir=str(root))
    if receipt.failed:
        logger.error("docker compose %s failed: %s", operation, receipt.error)
        raise ExternalToolError(receipt.action_id, receipt.exit_code, receipt.error or "")
    return receipt
