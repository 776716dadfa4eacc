# mummy/config/__init__.py
"""
Configuration management for mummy.

Usage:
    from mummy.config import load_config

    config = load_config(source_root=Path("site"))
    config.image.scale_max_length  # always exists
"""

from mummy.config.loader import load_config
from mummy.config.schema import AspectConfig, ImageConfig, MummyConfig

__all__ = ["load_config", "MummyConfig", "ImageConfig", "AspectConfig"]
