"""Language adapters — node."""

from alterforge.adapters.languages.node import NodeAdapter

__all__ = ["NodeAdapter"]
