"""
Generated file model — the unit every generator produces.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file planned by a generator, not yet written.

    Attributes:
        path:      Path relative to the directory it is written under
                   (project root or service directory).
        content:   Full file content.
        overwrite: Whether an existing file may be replaced.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    overwrite: bool = False
    reason: str = ""

    def target(self, base: Path) -> Path:
        """Absolute destination of this file under *base*."""
        return base / self.path
