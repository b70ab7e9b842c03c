"""
Feature resolver — feature selection → dependency manifest and stub files.

Pure function of its inputs. Rules are applied in a fixed order so that
later entries win on key collision:

    base  →  GraphQL  →  gRPC  →  Sequelize (+ one driver set)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from alterforge.core.models.service import (
    Database,
    Feature,
    ResolvedFeatures,
    database_profile,
)
from alterforge.core.services.generators.node_service import (
    generate_graphql_schema,
    generate_grpc_proto,
    generate_sequelize_connector,
)

logger = logging.getLogger(__name__)


# ── Dependency tables ───────────────────────────────────────────

BASE_DEPENDENCIES: dict[str, str] = {
    "express": "^4.18.2",
    "dotenv": "^16.0.3",
}

DEV_DEPENDENCIES: dict[str, str] = {
    "nodemon": "^3.1.0",
    "typescript": "^5.0.4",
    "@types/node": "^20.3.3",
    "@types/express": "^4.17.21",
    "ts-node": "^10.9.2",
}

GRAPHQL_DEPENDENCIES: dict[str, str] = {
    "graphql": "^16.8.1",
    "@apollo/server": "^4.10.0",
    "body-parser": "^1.20.2",
    "cors": "^2.8.5",
    "express": "^4.18.2",
}

GRPC_DEPENDENCIES: dict[str, str] = {
    "@grpc/grpc-js": "^1.9.9",
    "@grpc/proto-loader": "^0.7.9",
}

ORM_DEPENDENCIES: dict[str, str] = {
    "sequelize": "^6.35.0",
}

DRIVER_DEPENDENCIES: dict[Database, dict[str, str]] = {
    Database.MYSQL: {"mysql2": "^3.9.0"},
    Database.POSTGRESQL: {"pg": "^8.11.0", "pg-hstore": "^2.3.4"},
}

# Database assumed when Sequelize is selected without an explicit choice
FALLBACK_DATABASE = Database.POSTGRESQL


def normalize_features(selected: Iterable[str | Feature]) -> list[Feature]:
    """Map raw selections onto known features, dropping unknown entries.

    Matching is case-insensitive; order of first appearance is kept and
    duplicates are removed.
    """
    by_key = {f.value.lower(): f for f in Feature}
    result: list[Feature] = []
    for raw in selected:
        feature = by_key.get(str(raw).strip().lower())
        if feature is None:
            if str(raw).strip():
                logger.warning("Ignoring unknown feature: %s", raw)
            continue
        if feature not in result:
            result.append(feature)
    return result


def resolve_features(
    name: str,
    features: Iterable[str | Feature],
    database: Database | None = None,
) -> ResolvedFeatures:
    """Resolve a feature selection for the service called *name*.

    Args:
        name: Service name (used inside the GraphQL/gRPC stubs).
        features: Selected features; unknown entries are ignored.
        database: Database choice, only meaningful with Sequelize.

    Returns:
        ResolvedFeatures with dependencies, stub files and the
        connection string. Never raises.
    """
    selected = set(normalize_features(features))

    dependencies = dict(BASE_DEPENDENCIES)
    files = []

    if Feature.GRAPHQL in selected:
        dependencies.update(GRAPHQL_DEPENDENCIES)
        files.append(generate_graphql_schema(name))

    if Feature.GRPC in selected:
        dependencies.update(GRPC_DEPENDENCIES)
        files.append(generate_grpc_proto(name))

    connection_string = ""
    used_database: Database | None = None
    if Feature.SEQUELIZE in selected:
        used_database = database or FALLBACK_DATABASE
        dependencies.update(ORM_DEPENDENCIES)
        dependencies.update(DRIVER_DEPENDENCIES[used_database])
        files.append(generate_sequelize_connector())
        connection_string = database_profile(used_database).connection_string

    logger.debug(
        "Resolved %s: features=%s database=%s deps=%d",
        name,
        sorted(f.value for f in selected),
        used_database,
        len(dependencies),
    )

    return ResolvedFeatures(
        dependencies=dependencies,
        dev_dependencies=dict(DEV_DEPENDENCIES),
        files=files,
        connection_string=connection_string,
        database=used_database,
    )
