# mummy/core/paths.py
"""
Central path management for mummy.

Every component that maps between the site source tree, the site target tree
and the description (sidecar) tree goes through this module. No other module
builds those paths by hand.

Design principles:
- Target paths are source paths rebased, segment for segment, no renaming
- Sidecar paths are derived deterministically from the source path
- Writes that other runs will trust happen through a temp file + rename
"""

from __future__ import annotations

import os
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator, List, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DESCRIPTION_FILE_EXTENSION = "json"


class MummyPaths:
    """
    Path arithmetic for a site build.

    Usage:
        from mummy.core.paths import MummyPaths

        target = MummyPaths.rebase(source, source_root, target_root)
        sidecar = MummyPaths.description_file(description_root, source_root, source)
    """

    # =========================================================================
    # Tree Mapping
    # =========================================================================

    @staticmethod
    def rebase(path: Path, old_base: Path, new_base: Path) -> Path:
        """
        Change the base of a path from one tree to another.

        Raises:
            ValueError: If the path is not inside old_base
        """
        return new_base / path.relative_to(old_base)

    @staticmethod
    def default_description_directory(target_root: Path) -> Path:
        """
        The description tree used when none is configured.

        Default: a sibling of the target root named `<target>-description`,
        so that cleaning the target tree leaves cached descriptions alone.
        """
        return target_root.parent / f"{target_root.name}-description"

    @staticmethod
    def description_file(
        description_root: Path,
        source_root: Path,
        source_path: Path,
        aspect: Optional[str] = None,
    ) -> Path:
        """
        Sidecar location of the description of a source path.

        Aspects of the same source get their own sidecar:
            photo.jpg          -> <root>/photo.jpg.json
            photo.jpg/preview  -> <root>/photo.jpg.preview.json
        """
        relative = source_path.relative_to(source_root)
        name = relative.name if relative.name else source_root.name
        if aspect is not None:
            name = f"{name}.{aspect}"
        return description_root / relative.parent / f"{name}.{DESCRIPTION_FILE_EXTENSION}"

    @staticmethod
    def check_disjoint(*paths: Path) -> None:
        """
        Ensure no path is the same as or nested inside another.

        Raises:
            ValueError: If any two paths overlap
        """
        resolved = [p.resolve() for p in paths]
        for i, first in enumerate(resolved):
            for second in resolved[i + 1:]:
                if first == second or first in second.parents or second in first.parents:
                    raise ValueError(f"Directories `{first}` and `{second}` overlap.")

    # =========================================================================
    # Filenames
    # =========================================================================

    @staticmethod
    def filename_extensions(filename: str) -> List[str]:
        """
        All dot-delimited extension candidates, most specific first.

        A leading dot (as in `.htaccess`) does not start an extension.

        Examples:
            >>> MummyPaths.filename_extensions("archive.tar.gz")
            ['tar.gz', 'gz']
            >>> MummyPaths.filename_extensions("README")
            []
        """
        segments = filename.lstrip(".").split(".")
        return [".".join(segments[i:]) for i in range(1, len(segments))]

    @staticmethod
    def base_name(filename: str) -> str:
        """The part of a filename before its first extension (`index.en.xhtml` -> `index`)."""
        stripped = filename.lstrip(".")
        leading = filename[: len(filename) - len(stripped)]
        return leading + stripped.split(".", 1)[0]

    @staticmethod
    def with_name_suffix(path: Path, suffix: str) -> Path:
        """Append a suffix to the base of a filename (`photo.jpg`, `-preview` -> `photo-preview.jpg`)."""
        return path.with_name(f"{path.stem}{suffix}{path.suffix}")

    # =========================================================================
    # Timestamps
    # =========================================================================

    @staticmethod
    def modified_at(path: Path) -> Optional[datetime]:
        """
        Modification time of a file as an aware UTC datetime, or None if missing.

        Built from st_mtime_ns with integer arithmetic, so two reads of an
        unchanged file always produce equal values.
        """
        try:
            mtime_ns = path.stat().st_mtime_ns
        except FileNotFoundError:
            return None
        return EPOCH + timedelta(microseconds=mtime_ns // 1000)

    # =========================================================================
    # Writing
    # =========================================================================

    @staticmethod
    @contextmanager
    def atomic_target(target_path: Path) -> Iterator[Path]:
        """
        Yield a temp path next to target_path; move it into place on success.

        On any exception the temp file is removed and the existing target (if
        any) is left untouched, so a partial write is never observable.
        """
        target_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = target_path.with_name(f".{target_path.name}.{uuid.uuid4().hex}.tmp")
        try:
            yield temp_path
            os.replace(temp_path, target_path)
        except BaseException:
            if temp_path.exists():
                temp_path.unlink()
            raise


__all__ = ["MummyPaths", "EPOCH", "DESCRIPTION_FILE_EXTENSION"]
