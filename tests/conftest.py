"""
Shared test fixtures and configuration.
"""

import random
from pathlib import Path

import pytest

from alterforge.adapters.mock import MockAdapter
from alterforge.adapters.registry import AdapterRegistry
from alterforge.core.models.service import Database, Feature
from alterforge.core.services.scaffold_ops import ServiceOptions, init_project


@pytest.fixture
def mock_adapter() -> MockAdapter:
    """Mock adapter recording every external tool call."""
    return MockAdapter()


@pytest.fixture
def registry(mock_adapter: MockAdapter) -> AdapterRegistry:
    """Registry in mock mode routing every action to ``mock_adapter``."""
    reg = AdapterRegistry()
    reg.set_mock_mode(True, mock_adapter)
    return reg


@pytest.fixture
def rng() -> random.Random:
    """Seeded RNG so port allocation is reproducible."""
    return random.Random(1234)


@pytest.fixture
def project(tmp_path: Path, registry: AdapterRegistry, rng: random.Random) -> Path:
    """A freshly initialized project "shop" (PostgreSQL, core = Sequelize + REST)."""
    result = init_project(
        tmp_path,
        "shop",
        database=Database.POSTGRESQL,
        core=ServiceOptions(
            name="core",
            features=[Feature.SEQUELIZE, Feature.REST],
            database=Database.POSTGRESQL,
        ),
        registry=registry,
        rng=rng,
    )
    return result.root
