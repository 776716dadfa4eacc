# mummy/cli/commands/build.py
"""
Build command.

Usage:
    mummy build ./site ./out
    mummy build ./site ./out --fail-fast
    mummy build ./site ./out --config mummy.yaml --verbose

Exit code is 1 if any artifact failed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from mummy.cli.ui import ui
from mummy.config.loader import load_config
from mummy.core.exceptions import MummyError
from mummy.engine import MummyEngine
from mummy.logging.logger import configure_logging, get_logger
from mummy.logging.tags import CLI

logger = get_logger(__name__)


def command(
    source: Path,
    target: Path,
    config: Optional[Path],
    fail_fast: bool,
    verbose: bool,
) -> None:
    configure_logging(logging.DEBUG if verbose else logging.INFO)

    try:
        mummy_config = load_config(source_root=source, config_path=config)
        if fail_fast:
            mummy_config = mummy_config.model_copy(update={"keep_going": False})
        ui.header("Mummy Build", f"{source} -> {target}")
        summary = MummyEngine(config=mummy_config).run(source, target)
    except (MummyError, ValueError) as e:
        logger.debug(f"{CLI} Build aborted", exc_info=True)
        ui.error(str(e))
        raise typer.Exit(1)

    ui.build_summary(summary)
    if not summary.succeeded:
        raise typer.Exit(1)
    ui.success("Site is up to date")
