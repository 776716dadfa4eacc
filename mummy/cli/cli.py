# mummy/cli/cli.py
"""
Mummy CLI - Main application.

Commands:
    mummy plan      Plan a site and print its artifact tree (no writes)
    mummy build     Mummify a site incrementally
    mummy config    Show the merged configuration

NOTE: Commands use lazy loading - imports happen when a command is invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="mummy",
    help="Mummy - incremental static site generation. Start with: mummy build ./site ./out",
    no_args_is_help=True,
    add_completion=False,
)


# =============================================================================
# LAZY COMMANDS
# =============================================================================


@app.command("plan")
def plan(
    source: Path = typer.Argument(..., help="Site source directory."),
    target: Path = typer.Argument(..., help="Site target directory."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Plan a site and print the artifact tree without writing anything."""
    from mummy.cli.commands import plan as mod

    mod.command(source=source, target=target, config=config, verbose=verbose)


@app.command("build")
def build(
    source: Path = typer.Argument(..., help="Site source directory."),
    target: Path = typer.Argument(..., help="Site target directory."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file."),
    fail_fast: bool = typer.Option(False, "--fail-fast", "-x", help="Stop at the first failing artifact."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Mummify a site, regenerating only what changed."""
    from mummy.cli.commands import build as mod

    mod.command(source=source, target=target, config=config, fail_fast=fail_fast, verbose=verbose)


@app.command("config")
def config(
    source: Optional[Path] = typer.Option(None, "--source", "-s", help="Site source directory."),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file."),
) -> None:
    """Show the merged configuration as YAML."""
    from mummy.cli.commands import config as mod

    mod.command(source=source, config_path=config_path)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
