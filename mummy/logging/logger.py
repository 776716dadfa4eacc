# mummy/logging/logger.py
"""
Unified logging setup for mummy.

All modules use:
    from mummy.logging.logger import get_logger
    logger = get_logger(__name__)

Log namespaces follow module paths automatically; configuration happens in
exactly one place (configure_logging), normally the CLI entrypoint.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

DEFAULT_FORMAT = "[%(levelname)s] %(name)s - %(message)s"


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: TextIO | None = None,
) -> None:
    """
    Configure the root logging handler.

    Safe to call multiple times; a handler is only added once.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Do NOT configure logging here; that is configure_logging()'s job.
    """
    return logging.getLogger(name)


__all__ = ["DEFAULT_FORMAT", "configure_logging", "get_logger"]
