# tests/conftest.py
"""
Shared fixtures for mummy tests.

Test Tiers:
===========
- tier1: Pure logic - no file system (<5s)
         Run: pytest -m tier1
- tier2: File system tests on tmp_path (real images, real sidecars)
         Run: pytest -m "tier1 or tier2"

Tiers are assigned per test file in pytest_collection_modifyitems; a test
that already carries a tier marker keeps it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional, Tuple

import pytest
from PIL import Image

from mummy.config.schema import ImageConfig, MummyConfig
from mummy.core.context import MummyContext
from mummy.core.registry import MummifierRegistry

# Files that are pure logic (no tmp_path, no images on disk)
TIER1_PATTERNS = [
    "test_description_model",
    "test_description_schema",
    "test_scaled_dimensions",
    "test_registry",
]


def pytest_collection_modifyitems(items):
    """Add tier markers based on the test file."""
    for item in items:
        fspath = str(item.fspath)

        has_tier = any(marker.name.startswith("tier") for marker in item.iter_markers())
        if has_tier:
            continue

        if any(pattern in fspath for pattern in TIER1_PATTERNS):
            item.add_marker(pytest.mark.tier1)
        else:
            item.add_marker(pytest.mark.tier2)


# =============================================================================
# Site Fixtures
# =============================================================================


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    """Empty site source directory."""
    path = tmp_path / "src"
    path.mkdir()
    return path


@pytest.fixture
def target_root(tmp_path: Path) -> Path:
    """Site target directory (not created; the build creates it)."""
    return tmp_path / "out"


@pytest.fixture
def description_root(tmp_path: Path) -> Path:
    """Default description directory for target_root."""
    return tmp_path / "out-description"


@pytest.fixture
def image_config() -> Callable[..., MummyConfig]:
    """Factory for a config that treats every image as large."""

    def make(**image_settings) -> MummyConfig:
        settings = {"process_threshold_file_size": 0}
        settings.update(image_settings)
        return MummyConfig(image=ImageConfig(**settings))

    return make


@pytest.fixture
def make_context(source_root: Path, target_root: Path) -> Callable[..., MummyContext]:
    """Factory for a build context over source_root/target_root."""

    def make(
        config: Optional[MummyConfig] = None,
        registry: Optional[MummifierRegistry] = None,
    ) -> MummyContext:
        return MummyContext(source_root, target_root, config=config, registry=registry)

    return make


# =============================================================================
# File Helpers
# =============================================================================


def write_image(
    path: Path,
    size: Tuple[int, int] = (400, 200),
    mode: str = "RGB",
    image_format: Optional[str] = None,
    **save_options,
) -> Path:
    """Write a small solid-color image with Pillow."""
    path.parent.mkdir(parents=True, exist_ok=True)
    color = {"RGB": (200, 40, 40), "RGBA": (200, 40, 40, 128), "L": 128, "P": 3}[mode]
    image = Image.new(mode, size, color)
    image.save(path, format=image_format, **save_options)
    return path


def bump_mtime(path: Path, seconds: int = 10) -> None:
    """Move a file's modification time forward without relying on clock resolution."""
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + seconds * 1_000_000_000))


@pytest.fixture
def image_writer() -> Callable[..., Path]:
    return write_image


@pytest.fixture
def touch() -> Callable[..., None]:
    return bump_mtime
