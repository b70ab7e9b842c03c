"""
Settings model — optional user defaults loaded from alterforge.yml.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from alterforge.core.models.service import Database, Feature


class Settings(BaseModel):
    """Defaults applied when a choice is not given on the command line.

    Every key is optional; an absent file means all defaults.
    """

    default_database: Database = Database.POSTGRESQL
    default_features: list[Feature] = Field(
        default_factory=lambda: [Feature.SEQUELIZE, Feature.REST]
    )
    node_version: str = "18"
    port_range: tuple[int, int] = (3000, 6999)
    registry: str = "ghcr.io"

    @field_validator("port_range")
    @classmethod
    def _check_port_range(cls, value: tuple[int, int]) -> tuple[int, int]:
        low, high = value
        if not 1 <= low <= high <= 65535:
            raise ValueError(f"port_range must satisfy 1 <= low <= high <= 65535, got {value}")
        return value
