# mummy/core/exceptions.py
"""
Error taxonomy for mummy.

    MummyError
    ├── MummyConfigError
    ├── PlanningError
    ├── GenerationError
    ├── DescriptionPersistError
    └── RegistryError
        └── RegistryFrozenError

MummifierInvariantError is deliberately NOT a MummyError: it signals a broken
mummifier implementation, not a condition a build can recover from.
"""

from __future__ import annotations

from pathlib import Path


class MummyError(Exception):
    """Base error for all mummy failures."""

    pass


class MummyConfigError(MummyError):
    """Configuration could not be read or failed validation."""

    pass


class PlanningError(MummyError):
    """The source tree could not be planned (unreadable entries, colliding targets)."""

    pass


class GenerationError(MummyError):
    """A mummifier failed to generate the target of an artifact."""

    def __init__(self, source_path: Path | None, message: str) -> None:
        self.source_path = source_path
        super().__init__(f"Error generating `{source_path}`: {message}")


class DescriptionPersistError(MummyError):
    """
    An artifact description could not be written to its sidecar.

    The description is left marked dirty so that a later run retries.
    """

    def __init__(self, description_file: Path, message: str) -> None:
        self.description_file = description_file
        super().__init__(f"Error saving description `{description_file}`: {message}")


class RegistryError(MummyError):
    """Base error for mummifier registry operations."""

    pass


class RegistryFrozenError(RegistryError):
    """Raised when registering into a registry that is in use by a build."""

    pass


class MummifierInvariantError(AssertionError):
    """A mummifier broke its contract, e.g. generation produced no target file."""

    pass


__all__ = [
    "MummyError",
    "MummyConfigError",
    "PlanningError",
    "GenerationError",
    "DescriptionPersistError",
    "RegistryError",
    "RegistryFrozenError",
    "MummifierInvariantError",
]
