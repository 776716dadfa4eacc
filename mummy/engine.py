# mummy/engine.py
"""
Mummify engine.

Orchestrates one incremental build of a site:
1. Create the build context (roots, config, registry, description store)
2. Freeze the registry
3. Plan the artifact graph (no writes)
4. Mummify the root artifact depth-first
5. Report a BuildSummary

Per-artifact failures are collected in the summary; only invariant
violations abort the build.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from mummy.artifact.models import Artifact
from mummy.config.schema import MummyConfig
from mummy.core.context import BuildFailure, BuildSummary, MummyContext
from mummy.core.exceptions import MummyError
from mummy.core.registry import MummifierRegistry
from mummy.logging.logger import get_logger
from mummy.logging.tags import MUMMIFY, PLAN
from mummy.mummify.directory import plan

logger = get_logger(__name__)


class MummyEngine:
    """
    Builds a site target tree from a site source tree.

    Usage:
        engine = MummyEngine(config=load_config(source_root=Path("site")))
        summary = engine.run(Path("site"), Path("out"))
        print(summary)  # "regenerated 3, skipped 12, descriptions saved 3, failures 0"
    """

    def __init__(
        self,
        *,
        config: Optional[MummyConfig] = None,
        registry: Optional[MummifierRegistry] = None,
        description_root: Optional[Path] = None,
    ) -> None:
        """
        Args:
            config: Build configuration (if None, loaded per site: package
                defaults merged with `<source>/.mummy.yaml`)
            registry: Mummifier registry (standard registrations if None)
            description_root: Root of the sidecar tree (config or default if None)
        """
        self.config = config
        self.registry = registry if registry is not None else MummifierRegistry.with_defaults()
        self.description_root = description_root

    def create_context(self, source_root: Path, target_root: Path) -> MummyContext:
        return MummyContext(
            source_root,
            target_root,
            config=self.config,
            registry=self.registry,
            description_root=self.description_root,
        )

    def plan_site(self, source_root: Path, target_root: Path) -> Tuple[MummyContext, Artifact]:
        """
        Plan the artifact graph of a site without writing anything.

        Raises:
            PlanningError: If the source tree cannot be read or targets collide
        """
        context = self.create_context(source_root, target_root)
        self.registry.freeze()

        logger.info(f"{PLAN} Planning {context.source_root} -> {context.target_root}")
        root = plan(context, context.source_root)
        context.update_plan(root)
        return context, root

    def run(self, source_root: Path, target_root: Path) -> BuildSummary:
        """
        Plan and mummify a site.

        Returns:
            BuildSummary with per-artifact results and failures

        Raises:
            MummifierInvariantError: If a mummifier violated its contract
            MummyError: When keep_going is disabled and an artifact failed
        """
        context, root = self.plan_site(source_root, target_root)
        summary = context.summary

        logger.info(f"{MUMMIFY} Mummifying {context.source_root}")
        try:
            root.mummifier.mummify(context, root)
        except MummyError as e:
            if not context.keep_going:
                summary.finish()
                raise
            logger.error(f"{MUMMIFY} {e}")
            summary.failures.append(BuildFailure(root.source_path, str(e)))

        summary.finish()
        logger.info(f"{MUMMIFY} Done in {summary.duration_seconds:.2f}s: {summary}")
        return summary


def mummify_site(
    source_root: Path,
    target_root: Path,
    *,
    config: Optional[MummyConfig] = None,
    registry: Optional[MummifierRegistry] = None,
) -> BuildSummary:
    """Convenience wrapper: one build with a fresh engine."""
    return MummyEngine(config=config, registry=registry).run(source_root, target_root)


__all__ = ["MummyEngine", "mummify_site"]
