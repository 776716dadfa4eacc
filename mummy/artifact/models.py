# mummy/artifact/models.py
"""
Artifact graph.

An Artifact pairs a source location with a target location, a description
and the mummifier that generates it. Planning builds the graph bottom-up from
frozen values; afterwards only descriptions change.

    DirectoryArtifact (site root)
    ├── content_artifact   index.xhtml
    ├── Artifact           about.xhtml
    ├── Artifact           photo.jpg
    │   └── aspects        photo-preview.jpg
    └── DirectoryArtifact  blog/
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, FrozenSet, Iterator, Optional, Tuple

from mummy.artifact.description import Description

if TYPE_CHECKING:
    from mummy.mummify.base import Mummifier


@dataclass(frozen=True, eq=False)
class Artifact:
    """
    One generated unit.

    Identity based equality: two artifacts are the same only if they are the
    same planned node, even if their paths happen to match.
    """

    mummifier: "Mummifier"
    source_path: Optional[Path]
    target_path: Path
    description: Description = field(default_factory=Description)
    aspects: Tuple["Artifact", ...] = ()

    @property
    def aspect(self) -> Optional[str]:
        """The aspect id if this is a derived artifact."""
        return self.description.aspect

    @property
    def referent_source_files(self) -> FrozenSet[Path]:
        """Source files whose modification influences this artifact."""
        return frozenset({self.source_path}) if self.source_path is not None else frozenset()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source_path} -> {self.target_path})"


@dataclass(frozen=True, eq=False)
class DirectoryArtifact(Artifact):
    """
    A source directory with its optional content artifact and its children.

    The directory exclusively owns its children; children are unordered.
    """

    content_artifact: Optional[Artifact] = None
    child_artifacts: FrozenSet[Artifact] = frozenset()

    @property
    def referent_source_files(self) -> FrozenSet[Path]:
        referents = super().referent_source_files
        if self.content_artifact is not None and self.content_artifact.source_path is not None:
            return referents | {self.content_artifact.source_path}
        return referents

    def __repr__(self) -> str:
        return (
            f"DirectoryArtifact({self.source_path} -> {self.target_path}, "
            f"content={self.content_artifact is not None}, children={len(self.child_artifacts)})"
        )


def iter_artifacts(artifact: Artifact) -> Iterator[Artifact]:
    """Walk an artifact graph depth first: node, aspects, content, children."""
    yield artifact
    yield from artifact.aspects
    if isinstance(artifact, DirectoryArtifact):
        if artifact.content_artifact is not None:
            yield from iter_artifacts(artifact.content_artifact)
        for child in sorted(artifact.child_artifacts, key=lambda a: str(a.target_path)):
            yield from iter_artifacts(child)


__all__ = ["Artifact", "DirectoryArtifact", "iter_artifacts"]
