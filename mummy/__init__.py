"""
Mummy - incremental site mummification engine.

Turns a site source tree into a generated site target tree, regenerating
only what changed. Per-artifact descriptions are cached in sidecar files
so unchanged sources are neither re-read nor regenerated.

Quick Start:
    >>> from pathlib import Path
    >>> from mummy import mummify_site
    >>> summary = mummify_site(Path("site"), Path("out"))
    >>> print(summary)

Public API:
    Engine:
        - MummyEngine: Plans and mummifies a site
        - mummify_site: One-shot build
        - MummyContext: Per-build context passed to mummifiers
        - BuildSummary: Outcome of a build

    Extension:
        - MummifierRegistry: Extension -> mummifier dispatch
        - Artifact, DirectoryArtifact, Description

    Configuration:
        - load_config, MummyConfig

Architecture:
    mummy/
    ├── artifact/      # Artifact graph and descriptions
    ├── config/        # YAML configuration (pydantic)
    ├── core/          # Exceptions, paths, context, registry
    ├── description/   # Sidecar store and dirty tracking
    ├── mummify/       # Planner and mummifiers (directory, page, image, opaque)
    └── cli/           # Typer CLI
"""

__version__ = "0.1.0"

from mummy.artifact import Artifact, Description, DescriptionState, DirectoryArtifact
from mummy.config import MummyConfig, load_config
from mummy.core.context import BuildFailure, BuildSummary, MummyContext
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
from mummy.core.registry import MummifierRegistry
from mummy.engine import MummyEngine, mummify_site

__all__ = [
    "__version__",
    # Engine
    "MummyEngine",
    "mummify_site",
    "MummyContext",
    "BuildSummary",
    "BuildFailure",
    # Extension
    "MummifierRegistry",
    "Artifact",
    "DirectoryArtifact",
    "Description",
    "DescriptionState",
    # Configuration
    "MummyConfig",
    "load_config",
    # Exceptions
    "MummyError",
    "MummyConfigError",
    "PlanningError",
    "GenerationError",
    "DescriptionPersistError",
    "RegistryError",
    "RegistryFrozenError",
    "MummifierInvariantError",
]
