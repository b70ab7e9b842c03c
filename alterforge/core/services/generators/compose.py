"""
Compose generator — text blocks for docker/docker-compose.yml.

Blocks are plain YAML-shaped text, rendered so that they can be spliced
into an existing document without parsing it (see ``compose_splice``).
Every service block starts with a newline and ends with one, so that
consecutive blocks are separated by a blank line.
"""

from __future__ import annotations

from alterforge.core.models.service import Database, ServiceDescriptor, database_profile
from alterforge.core.models.template import GeneratedFile

COMPOSE_HEADER = """\
version: '3.9'
services:
"""


def render_database_block(database: Database) -> str:
    """Backing service block for *database* (image, env, port, data volume)."""
    profile = database_profile(database)
    env_lines = "".join(
        f"      {key}: {value}\n" for key, value in profile.environment.items()
    )
    return (
        f"\n"
        f"  {profile.service_name}:\n"
        f"    image: {profile.image}\n"
        f"    restart: always\n"
        f"    environment:\n"
        f"{env_lines}"
        f"    ports:\n"
        f'      - "{profile.port}:{profile.port}"\n'
        f"    volumes:\n"
        f"      - {profile.volume}:{profile.data_path}\n"
    )


def render_service_block(service: ServiceDescriptor) -> str:
    """Application service block built from ``services/<name>``.

    ``depends_on`` is only emitted for services backed by a database, so
    it always names a database service the manifest declares.
    """
    name, port = service.name, service.port
    block = (
        f"\n"
        f"  {name}:\n"
        f"    build: ../services/{name}\n"
        f"    ports:\n"
        f'      - "{port}:{port}"\n'
        f"    environment:\n"
        f"      - NODE_ENV=development\n"
        f"      - PORT={port}\n"
    )
    if service.database_service:
        block += (
            f"    depends_on:\n"
            f"      - {service.database_service}\n"
        )
    return block


def generate_compose(database: Database) -> GeneratedFile:
    """Initial compose manifest: header plus the default database service."""
    from alterforge.core.services.compose_splice import ensure_database_service

    content = ensure_database_service(COMPOSE_HEADER, database)
    return GeneratedFile(
        path="docker/docker-compose.yml",
        content=content,
        reason=f"Compose manifest with {database.value} backing service",
    )
