# mummy/cli/commands/plan.py
"""
Plan command.

Usage:
    mummy plan ./site ./out
    mummy plan ./site ./out --config mummy.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from mummy.cli.ui import artifact_tree, ui
from mummy.config.loader import load_config
from mummy.core.exceptions import MummyError
from mummy.engine import MummyEngine
from mummy.logging.logger import configure_logging, get_logger
from mummy.logging.tags import CLI

logger = get_logger(__name__)


def command(source: Path, target: Path, config: Optional[Path], verbose: bool) -> None:
    configure_logging(logging.DEBUG if verbose else logging.WARNING)

    try:
        mummy_config = load_config(source_root=source, config_path=config)
        context, root = MummyEngine(config=mummy_config).plan_site(source, target)
    except (MummyError, ValueError) as e:
        logger.debug(f"{CLI} Planning failed", exc_info=True)
        ui.error(str(e))
        raise typer.Exit(1)

    ui.header("Mummy Plan", f"{context.source_root} -> {context.target_root}")
    ui.tree(artifact_tree(context, root))
