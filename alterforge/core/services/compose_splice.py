"""
Compose splicer — parser-free edits of docker/docker-compose.yml.

The manifest is edited as text so hand-written content, comments and
formatting survive untouched. The only structure relied on is the
top-level ``volumes:`` marker (a line starting in column 0) that closes
the ``services:`` region.

Operations:
    insert_service_block     — put a block right before ``volumes:``
    ensure_database_service  — add a backing service + volume, once
    declared_services / declared_volumes — line-oriented name registry
"""

from __future__ import annotations

import logging
import re

from alterforge.core.models.service import Database, ServiceDescriptor, database_profile
from alterforge.core.services.generators.compose import (
    render_database_block,
    render_service_block,
)

logger = logging.getLogger(__name__)

_VOLUMES_MARKER = re.compile(r"^volumes:", re.MULTILINE)
_KEY = re.compile(r"^\s*([^\s:#'\"][^:]*?|'[^']*'|\"[^\"]*\")\s*:(\s|$)")


# ── Section registry ────────────────────────────────────────────


def _section_keys(doc: str, section: str) -> list[str]:
    """Keys declared directly under the top-level *section*.

    Only the first indentation level is read; nested keys (image,
    environment, …) are ignored.
    """
    header = re.compile(rf"^{re.escape(section)}:\s*(#.*)?$")
    keys: list[str] = []
    inside = False
    child_indent: int | None = None

    for line in doc.splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        if not line[0].isspace():
            inside = bool(header.match(line))
            child_indent = None
            continue
        if not inside:
            continue
        indent = len(line) - len(line.lstrip())
        if child_indent is None:
            child_indent = indent
        if indent != child_indent:
            continue
        match = _KEY.match(line)
        if match:
            key = match.group(1).strip("'\"")
            if key not in keys:
                keys.append(key)
    return keys


def declared_services(doc: str) -> list[str]:
    """Service names declared under ``services:``, in document order."""
    return _section_keys(doc, "services")


def declared_volumes(doc: str) -> list[str]:
    """Volume names declared under the top-level ``volumes:``."""
    return _section_keys(doc, "volumes")


def count_volume_sections(doc: str) -> int:
    """Number of top-level ``volumes:`` markers."""
    return len(_VOLUMES_MARKER.findall(doc))


# ── Splicing ────────────────────────────────────────────────────


def insert_service_block(doc: str, block: str) -> str:
    """Insert *block* right before the first top-level ``volumes:`` marker.

    Everything from the marker on is kept byte for byte. Without a marker
    the block is appended at the end of the document.

    Not idempotent: inserting two blocks for the same name yields two
    blocks. Callers check for the service first.
    """
    match = _VOLUMES_MARKER.search(doc)
    if match is None:
        return doc.rstrip() + "\n" + block

    before, after = doc[: match.start()], doc[match.end():]
    return before.rstrip() + "\n" + block + "\n" + "volumes:" + after


def has_database_service(doc: str, database: Database) -> bool:
    """Whether *doc* already declares the backing service for *database*.

    True when a service uses the database image or a service with the
    conventional name (``db`` / ``mysql``) is declared.
    """
    profile = database_profile(database)
    image = re.compile(
        rf"^\s*image:\s*['\"]?{re.escape(profile.image_token)}", re.MULTILINE
    )
    if image.search(doc):
        return True
    return profile.service_name in declared_services(doc)


def _append_volume(doc: str, volume: str) -> str:
    """Add *volume* to the top-level ``volumes:`` section, creating it if absent."""
    if volume in declared_volumes(doc):
        return doc

    lines = doc.splitlines(keepends=True)
    marker = next(
        (i for i, line in enumerate(lines) if _VOLUMES_MARKER.match(line)),
        None,
    )
    if marker is None:
        return doc.rstrip() + f"\n\nvolumes:\n  {volume}:\n"

    insert_at = marker + 1
    indent: str | None = None
    for i in range(marker + 1, len(lines)):
        line = lines[i]
        if not line.strip() or line.startswith("#"):
            continue
        if not line[0].isspace():
            break
        if indent is None and not line.lstrip().startswith("#"):
            indent = line[: len(line) - len(line.lstrip())]
        insert_at = i + 1

    head = lines[:insert_at]
    if head and not head[-1].endswith("\n"):
        head[-1] += "\n"
    entry = f"{indent or '  '}{volume}:\n"
    return "".join(head) + entry + "".join(lines[insert_at:])


def ensure_database_service(doc: str, database: Database) -> str:
    """Make sure *doc* has the backing service and volume for *database*.

    Applying it twice yields the same document as applying it once. The
    service block goes into the ``services:`` region, the volume entry
    into the existing ``volumes:`` section (or a new one).
    """
    if has_database_service(doc, database):
        return doc

    profile = database_profile(database)
    logger.info("Adding %s service '%s' to compose", database.value, profile.service_name)
    doc = insert_service_block(doc, render_database_block(database))
    return _append_volume(doc, profile.volume)


def add_application_service(doc: str, service: ServiceDescriptor) -> str:
    """Backing database (if any) plus the service's own block."""
    if service.database is not None:
        doc = ensure_database_service(doc, service.database)
    return insert_service_block(doc, render_service_block(service))
