# mummy/cli/commands/__init__.py
"""CLI command implementations, imported lazily by mummy.cli.cli."""
