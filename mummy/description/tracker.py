# mummy/description/tracker.py
"""
Incremental mummification: description caching and dirty tracking.

Two questions are answered separately for every file artifact:

1. Description validity - is what we believe about the source still true?
   A persisted description is reused only if its recorded source
   modification time equals the source file's current one exactly (both
   values come from the same file, so any difference means a change).
   Otherwise a fresh description is harvested from the source.

2. Target validity - does the generated file match the description?
   The target is regenerated if the description records no target
   modification time, or the recorded time differs from the target's
   current one (including a missing target).

The description is persisted whenever the target was regenerated or the
description itself is fresh; otherwise the sidecar is left untouched.

This split lets a deleted target be regenerated from cached metadata without
re-reading the source, and lets a stale description be refreshed without
rewriting anything unrelated.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Tuple

from mummy.artifact.description import Description
from mummy.artifact.vocab import (
    PROPERTY_TAG_ASPECT,
    PROPERTY_TAG_CONTENT_TYPE,
    PROPERTY_TAG_SOURCE_MODIFIED_AT,
)
from mummy.core.exceptions import (
    DescriptionPersistError,
    GenerationError,
    MummifierInvariantError,
    MummyError,
)
from mummy.core.paths import MummyPaths
from mummy.logging.logger import get_logger
from mummy.logging.tags import DESCRIPTION, MUMMIFY

if TYPE_CHECKING:
    from mummy.artifact.models import Artifact
    from mummy.core.context import MummyContext

logger = get_logger(__name__)

MetadataLoader = Callable[[], Iterable[Tuple[str, Any]]]
Generator = Callable[["MummyContext", "Artifact"], None]


@dataclass(frozen=True)
class MummifyOutcome:
    """What mummify_source_file did for one artifact."""

    regenerated: bool
    persisted: bool


# =============================================================================
# Description Lookup
# =============================================================================


def load_description(
    context: "MummyContext",
    source_path: Path,
    *,
    load_source_metadata: MetadataLoader,
    aspect: Optional[str] = None,
    content_type: Optional[str] = None,
) -> Description:
    """
    Determine the description of a source file.

    Reuses the persisted description if the source has not been modified
    since it was written; otherwise builds a fresh (dirty) one.

    Args:
        context: Build context
        source_path: Source file in the site source tree
        load_source_metadata: Called only for fresh descriptions; returns
            (tag, value) pairs in precedence order
        aspect: Aspect id for derived artifacts
        content_type: Media type of the artifact, if known
    """
    source_modified_at = MummyPaths.modified_at(source_path)

    cached = context.description_store.load(source_path, aspect)
    if cached is not None:
        recorded = cached.source_modified_at
        # no source, or no recorded timestamp: we cannot tell if it is stale
        if recorded is not None and source_modified_at is not None and recorded == source_modified_at:
            logger.debug(f"{DESCRIPTION} Using cached description of `{source_path}`")
            return cached
        logger.debug(f"{DESCRIPTION} Cached description of `{source_path}` is stale")

    description = Description()
    description.add_all_first(load_source_metadata())
    if content_type is not None:
        description.set(PROPERTY_TAG_CONTENT_TYPE, content_type)
    if aspect is not None:
        description.set(PROPERTY_TAG_ASPECT, aspect)
    if source_modified_at is not None:
        description.set(PROPERTY_TAG_SOURCE_MODIFIED_AT, source_modified_at)
    description.mark_dirty()
    return description


# =============================================================================
# Target Check, Generation and Persistence
# =============================================================================


def is_target_content_dirty(description: Description, target_modified_at: Optional[datetime]) -> bool:
    """
    True if a target must be (re)generated.

    Args:
        description: The artifact description
        target_modified_at: Current modification time of the target, None if missing
    """
    recorded = description.target_modified_at
    return recorded is None or target_modified_at is None or recorded != target_modified_at


def mummify_source_file(
    context: "MummyContext",
    artifact: "Artifact",
    generate: Generator,
) -> MummifyOutcome:
    """
    Bring one file artifact and its sidecar up to date.

    Args:
        context: Build context
        artifact: A planned artifact with a source path
        generate: Writes the target unconditionally (a mummifier's mummify_file)

    Raises:
        GenerationError: If generation failed (chained to the cause)
        MummifierInvariantError: If generation succeeded but produced no target
        DescriptionPersistError: If the sidecar could not be written; the
            description is left dirty and a regenerated target is kept
    """
    if artifact.source_path is None:
        raise ValueError(f"Artifact {artifact} has no source path to track.")

    source_path = artifact.source_path
    target_path = artifact.target_path
    description = artifact.description

    old_target_modified_at = MummyPaths.modified_at(target_path)
    content_dirty = is_target_content_dirty(description, old_target_modified_at)

    if content_dirty:
        try:
            generate(context, artifact)
        except (MummyError, MummifierInvariantError):
            raise
        except Exception as e:
            raise GenerationError(source_path, f"{type(e).__name__}: {e}") from e

        new_target_modified_at = MummyPaths.modified_at(target_path)
        if new_target_modified_at is None:
            raise MummifierInvariantError(
                f"Mummification of artifact source file `{source_path}` did not produce "
                f"target file `{target_path}`."
            )
        logger.debug(f"{MUMMIFY} Mummified file artifact {artifact}")
        context.summary.regenerated.append(target_path)
    else:
        logger.debug(f"{MUMMIFY} Using previously generated target file `{target_path}`")
        assert old_target_modified_at is not None
        new_target_modified_at = old_target_modified_at
        context.summary.skipped.append(target_path)

    description_dirty = content_dirty or description.is_dirty
    if description_dirty:
        description.target_modified_at = new_target_modified_at
        try:
            saved = context.description_store.save(source_path, description, artifact.aspect)
        except OSError as e:
            description.mark_dirty()
            raise DescriptionPersistError(
                context.description_store.description_file(source_path, artifact.aspect), str(e)
            ) from e
        description.mark_clean()
        context.summary.descriptions_saved.append(saved)
    else:
        logger.debug(
            f"{DESCRIPTION} Using previously generated description of `{source_path}`"
        )

    return MummifyOutcome(regenerated=content_dirty, persisted=description_dirty)


__all__ = [
    "MummifyOutcome",
    "load_description",
    "is_target_content_dirty",
    "mummify_source_file",
]
