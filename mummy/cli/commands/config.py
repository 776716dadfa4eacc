# mummy/cli/commands/config.py
"""
Configuration command.

Usage:
    mummy config                   # Package defaults
    mummy config --source ./site   # Defaults merged with ./site/.mummy.yaml
    mummy config --config my.yaml  # Defaults merged with my.yaml
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml

from mummy.cli.ui import ui
from mummy.config.loader import get_config_source, load_config
from mummy.core.exceptions import MummyConfigError


def command(source: Optional[Path], config_path: Optional[Path]) -> None:
    try:
        config = load_config(source_root=source, config_path=config_path)
    except MummyConfigError as e:
        ui.error(str(e))
        raise typer.Exit(1)

    ui.info(f"Source: {get_config_source(source_root=source, config_path=config_path)}")
    content = yaml.safe_dump({"mummy": config.model_dump(mode="json")}, sort_keys=False)
    ui.yaml(content)
