"""Adapters — bindings for the external tools the scaffolder drives.

Public re-exports for convenient access.
"""

from alterforge.adapters.base import Adapter, ExecutionContext
from alterforge.adapters.mock import MockAdapter
from alterforge.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
