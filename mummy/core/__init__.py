# mummy/core/__init__.py
"""
Core engine types: exceptions, path helpers, build context and registry.

Only exceptions and path helpers are re-exported here; import the context
and registry from their modules.
"""

from mummy.core.exceptions import (
    DescriptionPersistError,
    GenerationError,
    MummifierInvariantError,
    MummyConfigError,
    MummyError,
    PlanningError,
    RegistryError,
    RegistryFrozenError,
)
from mummy.core.paths import MummyPaths

__all__ = [
    "MummyError",
    "MummyConfigError",
    "PlanningError",
    "GenerationError",
    "DescriptionPersistError",
    "RegistryError",
    "RegistryFrozenError",
    "MummifierInvariantError",
    "MummyPaths",
]
