"""Adapters — bindings for the external programs and services the installer uses.

Public re-exports for convenient access.
"""

from starship_setup.adapters.base import Adapter, ExecutionContext
from starship_setup.adapters.mock import MockAdapter
from starship_setup.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
