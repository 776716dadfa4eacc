# mummy/cli/__init__.py
"""
Mummy CLI.

Usage:
    mummy plan ./site ./out      # Show the artifact tree
    mummy build ./site ./out     # Incremental build
    mummy config --source ./site # Show merged configuration
"""

from mummy.cli.cli import app

__all__ = ["app"]
