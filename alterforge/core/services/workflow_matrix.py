"""
Workflow matrix updater — keeps ``matrix.service`` in ci-cd.yml in sync.

Text-level: only the bracketed list is rewritten, everything else in the
workflow stays as it was. A workflow without a recognisable matrix is
left alone.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# matrix:
#   service: [core, auth]
_MATRIX = re.compile(r"(matrix:\s+service:\s*\[)([^\]\n]*)(\])")


def _parse_list(raw: str) -> list[str]:
    """Items as written, quotes included."""
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unquote(item: str) -> str:
    if len(item) >= 2 and item[0] == item[-1] and item[0] in "\"'":
        return item[1:-1]
    return item


def read_matrix(doc: str) -> list[str] | None:
    """Service names in the matrix list, or None when there is no matrix."""
    match = _MATRIX.search(doc)
    if match is None:
        return None
    return [_unquote(item) for item in _parse_list(match.group(2))]


def add_to_matrix(doc: str, service: str) -> str:
    """Append *service* to the matrix list unless already present.

    Existing names keep their order and spelling (quoted entries such as
    ``'core'`` count as ``core``). Returns *doc* unchanged when the
    matrix pattern is not found.
    """
    match = _MATRIX.search(doc)
    if match is None:
        logger.warning("No matrix.service list found in workflow; leaving it unchanged")
        return doc

    items = _parse_list(match.group(2))
    if service in (_unquote(item) for item in items):
        return doc
    items.append(service)

    start, end = match.span(2)
    return doc[:start] + ", ".join(items) + doc[end:]
