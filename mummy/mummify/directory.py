# mummy/mummify/directory.py
"""
Planning and directory composition.

plan() is the single entry point for turning a source path into an artifact
graph. Directories are composed by DirectoryMummifier:

    site/                      DirectoryArtifact
    ├── index.xhtml            -> content_artifact (first reserved base name)
    ├── about.xhtml            -> child
    └── photos/                -> child (DirectoryArtifact)

Planning never writes to the file system. Any I/O error while listing or
statting aborts the subtree with a PlanningError; no partial artifact is
returned for it.
"""

from __future__ import annotations

import fnmatch
import stat
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING, FrozenSet, List, Optional

from mummy.artifact.description import Description, DescriptionState
from mummy.artifact.models import Artifact, DirectoryArtifact
from mummy.core.context import BuildFailure
from mummy.core.exceptions import GenerationError, MummifierInvariantError, MummyError, PlanningError
from mummy.core.paths import MummyPaths
from mummy.logging.logger import get_logger
from mummy.logging.tags import MUMMIFY, PLAN

if TYPE_CHECKING:
    from mummy.core.context import MummyContext
    from mummy.description.store import DescriptionStore

logger = get_logger(__name__)


def plan(context: "MummyContext", source_path: Path) -> Artifact:
    """
    Plan the artifact (graph) for a source file or directory.

    Raises:
        PlanningError: If the source cannot be read or targets collide
    """
    try:
        mode = source_path.stat().st_mode
    except OSError as e:
        raise PlanningError(f"Cannot read source `{source_path}`: {e}") from e

    if stat.S_ISDIR(mode):
        mummifier = context.registry.get_mummifier_for_directory(source_path)
    else:
        mummifier = context.registry.get_mummifier_for_file(source_path)

    try:
        return mummifier.plan(context, source_path)
    except MummyError:
        raise
    except OSError as e:
        raise PlanningError(f"Error planning `{source_path}`: {e}") from e


def check_distinct_targets(
    artifacts: List[Artifact],
    description_store: Optional["DescriptionStore"] = None,
) -> None:
    """
    Ensure sibling artifacts (and their aspects) generate distinct targets.

    With a description store, their sidecars must be distinct too: the
    sidecar of aspect `preview` of `photo.png` is the one a sibling source
    file named `photo.png.preview` would use.

    Raises:
        PlanningError: Naming every colliding target or sidecar path
    """
    targets = Counter()
    for artifact in artifacts:
        for member in (artifact,) + artifact.aspects:
            targets[member.target_path] += 1
            if (
                description_store is not None
                and member.source_path is not None
                and not isinstance(member, DirectoryArtifact)
            ):
                targets[description_store.description_file(member.source_path, member.aspect)] += 1
    duplicates = sorted(str(path) for path, count in targets.items() if count > 1)
    if duplicates:
        raise PlanningError(f"Multiple artifacts would generate: {', '.join(duplicates)}")


class DirectoryMummifier:
    """Composes a directory's content artifact and children into one artifact."""

    plugin_name = "directory"

    @property
    def supported_extensions(self) -> FrozenSet[str]:
        return frozenset()

    def _is_ignored(self, context: "MummyContext", name: str) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in context.config.ignore)

    def _is_content_file(self, context: "MummyContext", path: Path) -> bool:
        return path.is_file() and MummyPaths.base_name(path.name) in context.config.content_base_names

    def plan(self, context: "MummyContext", source_path: Path) -> DirectoryArtifact:
        try:
            entries = sorted(source_path.iterdir())
        except OSError as e:
            raise PlanningError(f"Cannot list source directory `{source_path}`: {e}") from e

        content_artifact: Optional[Artifact] = None
        children: List[Artifact] = []
        for entry in entries:
            if self._is_ignored(context, entry.name):
                logger.debug(f"{PLAN} Ignoring `{entry}`")
                continue
            artifact = plan(context, entry)
            if content_artifact is None and self._is_content_file(context, entry):
                content_artifact = artifact
            else:
                children.append(artifact)

        check_distinct_targets(
            children + ([content_artifact] if content_artifact else []),
            context.description_store,
        )

        logger.debug(
            f"{PLAN} Planned directory `{source_path}`: "
            f"content={content_artifact is not None}, children={len(children)}"
        )
        return DirectoryArtifact(
            mummifier=self,
            source_path=source_path,
            target_path=context.target_path(source_path),
            # directories have no sidecar; nothing to persist
            description=Description(state=DescriptionState.CACHED),
            content_artifact=content_artifact,
            child_artifacts=frozenset(children),
        )

    def mummify(self, context: "MummyContext", artifact: Artifact) -> None:
        """
        Create the target directory and mummify content and children.

        A failing child is recorded in the build summary and its siblings are
        still mummified, unless the configuration says to stop at the first error.
        """
        if not isinstance(artifact, DirectoryArtifact):
            raise TypeError(f"{self.plugin_name} mummifier cannot mummify {artifact!r}")

        try:
            artifact.target_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GenerationError(artifact.source_path, f"cannot create directory: {e}") from e

        members: List[Artifact] = []
        if artifact.content_artifact is not None:
            members.append(artifact.content_artifact)
        members.extend(sorted(artifact.child_artifacts, key=lambda a: str(a.target_path)))

        for member in members:
            try:
                member.mummifier.mummify(context, member)
            except MummifierInvariantError:
                raise
            except MummyError as e:
                if not context.keep_going:
                    raise
                logger.error(f"{MUMMIFY} {e}")
                context.summary.failures.append(BuildFailure(member.source_path, str(e)))


__all__ = ["DirectoryMummifier", "plan", "check_distinct_targets"]
