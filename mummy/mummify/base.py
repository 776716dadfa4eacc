# mummy/mummify/base.py
"""
Mummifier protocols and shared helpers.

Each mummifier is a small strategy object that provides capabilities:
- plugin_name: str - identifier used in logs and the CLI
- supported_extensions: extensions it registers for (file mummifiers)
- plan(context, source_path) -> Artifact
- mummify(context, artifact) -> None

File mummifiers additionally provide the hooks used by the shared helpers:
- load_source_metadata(context, source_file) -> [(tag, value), ...]
- get_artifact_media_type(context, source_file) -> str | None
- mummify_file(context, artifact) - generate the target unconditionally

Behavior common to file mummifiers lives in plain functions here (and in
mummy.description.tracker) instead of an inheritance chain, so a mummifier
only implements what differs.
"""

from __future__ import annotations

import mimetypes
import shutil
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Any,
    FrozenSet,
    List,
    Optional,
    Protocol,
    Tuple,
    runtime_checkable,
)

from mummy.artifact.models import Artifact
from mummy.core.paths import MummyPaths
from mummy.description.tracker import load_description

if TYPE_CHECKING:
    from mummy.core.context import MummyContext

MetadataPairs = List[Tuple[str, Any]]


@runtime_checkable
class Planner(Protocol):
    """Creates the artifact (graph) for a source path without writing anything."""

    def plan(self, context: "MummyContext", source_path: Path) -> Artifact:
        ...


@runtime_checkable
class ContentGenerator(Protocol):
    """Brings the target of a planned artifact up to date."""

    def mummify(self, context: "MummyContext", artifact: Artifact) -> None:
        ...


@runtime_checkable
class Mummifier(Planner, ContentGenerator, Protocol):
    """
    A planner and generator bound to one or more file types.

    Example:
        >>> mummifier = OpaqueFileMummifier()
        >>> mummifier.plugin_name
        'opaque'
    """

    plugin_name: str

    @property
    def supported_extensions(self) -> FrozenSet[str]:
        ...


@runtime_checkable
class FileMummifier(Mummifier, Protocol):
    """A mummifier that generates one target file per source file."""

    def load_source_metadata(self, context: "MummyContext", source_file: Path) -> MetadataPairs:
        ...

    def get_artifact_media_type(self, context: "MummyContext", source_file: Path) -> Optional[str]:
        ...

    def mummify_file(self, context: "MummyContext", artifact: Artifact) -> None:
        ...


# =============================================================================
# Shared Helpers
# =============================================================================


def guess_media_type(path: Path) -> Optional[str]:
    """Media type from the filename, or None if unknown."""
    media_type, _ = mimetypes.guess_type(path.name, strict=False)
    return media_type


def plan_source_file(
    context: "MummyContext",
    mummifier: FileMummifier,
    source_file: Path,
    aspect: Optional[str] = None,
    target_path: Optional[Path] = None,
) -> Artifact:
    """
    Plan a file artifact: load (or build) its description and compute its target.

    Args:
        aspect: Aspect id for derived artifacts (own sidecar, own description)
        target_path: Override of the rebased target path (used by aspects)
    """
    description = load_description(
        context,
        source_file,
        aspect=aspect,
        load_source_metadata=lambda: mummifier.load_source_metadata(context, source_file),
        content_type=mummifier.get_artifact_media_type(context, source_file),
    )
    return Artifact(
        mummifier=mummifier,
        source_path=source_file,
        target_path=target_path if target_path is not None else context.target_path(source_file),
        description=description,
    )


def copy_source(artifact: Artifact) -> None:
    """Copy an artifact's source bytes to its target, atomically."""
    if artifact.source_path is None:
        raise ValueError(f"Artifact {artifact} has no source to copy.")
    with MummyPaths.atomic_target(artifact.target_path) as temp_path:
        shutil.copyfile(artifact.source_path, temp_path)


__all__ = [
    "Planner",
    "ContentGenerator",
    "Mummifier",
    "FileMummifier",
    "MetadataPairs",
    "guess_media_type",
    "plan_source_file",
    "copy_source",
]
