"""Adapters — tool bindings for the nix CLIs, git and the filesystem.

Public re-exports for convenient access.
"""

from nixdots.adapters.base import Adapter, ExecutionContext
from nixdots.adapters.mock import MockAdapter
from nixdots.adapters.registry import AdapterRegistry, build_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "build_registry",
]
