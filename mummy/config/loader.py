# mummy/config/loader.py
"""
Layered configuration loading for site builds.

Merge strategy:
    1. Package defaults (mummy/config/defaults/mummy.yaml) - always loaded
    2. Site config (<source>/.mummy.yaml, or an explicit file) - overrides defaults

The merged dict is validated into a MummyConfig, so callers never need
fallback logic.

Usage:
    from mummy.config.loader import load_config

    config = load_config(source_root=Path("site"))
    config.image.with_aspects  # always exists
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from mummy.config.schema import MummyConfig
from mummy.core.exceptions import MummyConfigError
from mummy.logging.logger import get_logger
from mummy.logging.tags import CONFIG

logger = get_logger(__name__)

CONFIG_KEY = "mummy"
SITE_CONFIG_FILENAME = ".mummy.yaml"


def _get_defaults_path() -> Path:
    return Path(__file__).parent / "defaults" / "mummy.yaml"


# =============================================================================
# Deep Merge
# =============================================================================


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from `override` take precedence over `base`.
    Nested dicts are merged recursively; lists are replaced entirely.

    Examples:
        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        {'a': 1, 'b': {'c': 10, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


# =============================================================================
# Loading Functions
# =============================================================================


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise MummyConfigError(f"Cannot read configuration `{path}`: {e}") from e

    if not isinstance(raw, dict):
        raise MummyConfigError(f"Configuration `{path}` must be a mapping.")

    # files may nest everything under the `mummy` key or be flat
    section = raw.get(CONFIG_KEY, raw)
    return section or {}


def load_defaults() -> dict[str, Any]:
    """Load the package defaults as a plain dict."""
    defaults = _read_yaml(_get_defaults_path())
    logger.debug(f"{CONFIG} Loaded defaults from {_get_defaults_path()}")
    return defaults


def find_site_config(source_root: Path) -> Optional[Path]:
    """The site configuration file of a source tree, if there is one."""
    path = source_root / SITE_CONFIG_FILENAME
    return path if path.is_file() else None


def load_config_dict(
    source_root: Optional[Path] = None,
    config_path: Optional[Path] = None,
) -> dict[str, Any]:
    """
    Load the merged (but not yet validated) configuration.

    Args:
        source_root: Site source root, searched for `.mummy.yaml`
        config_path: Explicit configuration file; takes precedence over the site file

    Raises:
        MummyConfigError: If an explicit file is missing or any file is unreadable
    """
    config = load_defaults()

    if config_path is not None:
        if not config_path.is_file():
            raise MummyConfigError(f"Configuration file not found: {config_path}")
        user_path: Optional[Path] = config_path
    elif source_root is not None:
        user_path = find_site_config(source_root)
    else:
        user_path = None

    if user_path is None:
        logger.debug(f"{CONFIG} Using defaults only")
        return config

    merged = deep_merge(config, _read_yaml(user_path))
    logger.debug(f"{CONFIG} Merged defaults with {user_path}")
    return merged


def load_config(
    source_root: Optional[Path] = None,
    config_path: Optional[Path] = None,
) -> MummyConfig:
    """
    Load and validate the complete build configuration.

    Raises:
        MummyConfigError: If loading or validation fails
    """
    data = load_config_dict(source_root=source_root, config_path=config_path)
    try:
        return MummyConfig.model_validate(data)
    except ValidationError as e:
        raise MummyConfigError(f"Invalid configuration: {e}") from e


def get_config_source(source_root: Optional[Path] = None, config_path: Optional[Path] = None) -> str:
    """Human-readable description of where configuration comes from (for CLI display)."""
    if config_path is not None:
        return f"{config_path} (overriding defaults)"
    if source_root is not None:
        site_path = find_site_config(source_root)
        if site_path is not None:
            return f"{site_path} (overriding defaults)"
    return f"{_get_defaults_path()} (package defaults)"


__all__ = [
    "load_config",
    "load_config_dict",
    "load_defaults",
    "find_site_config",
    "deep_merge",
    "get_config_source",
    "SITE_CONFIG_FILENAME",
]
