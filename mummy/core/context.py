# mummy/core/context.py
"""
Build context.

A MummyContext is created once per build and passed explicitly to every
planning and mummification call. It carries the three site roots, the
validated configuration, the mummifier registry, the description store and
the running BuildSummary. Nothing here is process-global, so independent
builds (e.g. in tests) can run side by side with different registrations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

from mummy.config.loader import load_config
from mummy.config.schema import MummyConfig
from mummy.core.paths import MummyPaths
from mummy.description.store import DescriptionStore

if TYPE_CHECKING:
    from mummy.artifact.models import Artifact
    from mummy.core.registry import MummifierRegistry


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class BuildFailure:
    """One artifact that could not be generated or persisted."""

    source_path: Optional[Path]
    message: str

    def __str__(self) -> str:
        return f"{self.source_path}: {self.message}"


@dataclass
class BuildSummary:
    """Summary of one mummify run."""

    regenerated: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    descriptions_saved: List[Path] = field(default_factory=list)
    failures: List[BuildFailure] = field(default_factory=list)
    started_at: datetime = field(default_factory=_utcnow)
    finished_at: Optional[datetime] = None

    @property
    def succeeded(self) -> bool:
        return not self.failures

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def finish(self) -> None:
        self.finished_at = _utcnow()

    def __str__(self) -> str:
        return (
            f"regenerated {len(self.regenerated)}, skipped {len(self.skipped)}, "
            f"descriptions saved {len(self.descriptions_saved)}, "
            f"failures {len(self.failures)}"
        )


class MummyContext:
    """
    Everything a mummifier may consult during one build.

    Usage:
        context = MummyContext(Path("site"), Path("out"), config=load_config(Path("site")))
        root = plan(context, context.source_root)
        root.mummifier.mummify(context, root)
    """

    def __init__(
        self,
        source_root: Path,
        target_root: Path,
        *,
        config: Optional[MummyConfig] = None,
        registry: Optional["MummifierRegistry"] = None,
        description_root: Optional[Path] = None,
    ) -> None:
        """
        Args:
            source_root: Root of the site source tree
            target_root: Root of the generated tree; created as needed
            config: Build configuration; if None, the package defaults merged
                with the site file `<source_root>/.mummy.yaml`
            registry: Mummifier registry (standard registrations if None)
            description_root: Root of the sidecar tree; overrides the config

        Raises:
            ValueError: If any two of the three roots overlap
            MummyConfigError: If the site configuration is invalid
        """
        from mummy.core.registry import MummifierRegistry

        self.source_root = Path(source_root).absolute()
        self.config = config if config is not None else load_config(source_root=self.source_root)
        self.target_root = Path(target_root).absolute()
        if description_root is None:
            description_root = self.config.description_directory
        if description_root is None:
            description_root = MummyPaths.default_description_directory(self.target_root)
        self.description_root = Path(description_root).absolute()

        MummyPaths.check_disjoint(self.source_root, self.target_root, self.description_root)

        self.registry = registry if registry is not None else MummifierRegistry.with_defaults()
        self.description_store = DescriptionStore(self.source_root, self.description_root)
        self.summary = BuildSummary()
        self._artifacts_by_source: Dict[Path, "Artifact"] = {}

    @property
    def keep_going(self) -> bool:
        return self.config.keep_going

    def target_path(self, source_path: Path) -> Path:
        """Rebase a source path onto the target tree."""
        return MummyPaths.rebase(source_path, self.source_root, self.target_root)

    # =========================================================================
    # Plan Index
    # =========================================================================

    def update_plan(self, root: "Artifact") -> None:
        """Index a planned artifact graph by source path (primary artifacts only)."""
        from mummy.artifact.models import iter_artifacts

        self._artifacts_by_source = {
            artifact.source_path: artifact
            for artifact in iter_artifacts(root)
            if artifact.source_path is not None and artifact.aspect is None
        }

    def find_artifact(self, source_path: Path) -> Optional["Artifact"]:
        return self._artifacts_by_source.get(source_path)

    def artifact_target_path(self, source_path: Path) -> Path:
        """
        Where the artifact for a source path is generated.

        Uses the plan when the path was planned, else the plain rebase.
        """
        artifact = self.find_artifact(source_path)
        if artifact is not None:
            return artifact.target_path
        return self.target_path(source_path)

    def __repr__(self) -> str:
        return f"MummyContext({self.source_root} -> {self.target_root})"


__all__ = ["MummyContext", "BuildSummary", "BuildFailure"]
