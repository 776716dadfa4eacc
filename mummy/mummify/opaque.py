# mummy/mummify/opaque.py
"""
Opaque file mummifier: copies the source file to the target unchanged.

Used for every file no registered mummifier claims.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, FrozenSet, Optional

from mummy.artifact.models import Artifact
from mummy.description.tracker import mummify_source_file
from mummy.mummify.base import MetadataPairs, copy_source, guess_media_type, plan_source_file

if TYPE_CHECKING:
    from mummy.core.context import MummyContext


class OpaqueFileMummifier:
    """Copy-through mummifier; knows nothing about file contents."""

    plugin_name = "opaque"

    @property
    def supported_extensions(self) -> FrozenSet[str]:
        return frozenset()

    def plan(self, context: "MummyContext", source_path: Path) -> Artifact:
        return plan_source_file(context, self, source_path)

    def load_source_metadata(self, context: "MummyContext", source_file: Path) -> MetadataPairs:
        return []

    def get_artifact_media_type(self, context: "MummyContext", source_file: Path) -> Optional[str]:
        return guess_media_type(source_file)

    def mummify(self, context: "MummyContext", artifact: Artifact) -> None:
        mummify_source_file(context, artifact, self.mummify_file)

    def mummify_file(self, context: "MummyContext", artifact: Artifact) -> None:
        copy_source(artifact)


__all__ = ["OpaqueFileMummifier"]
