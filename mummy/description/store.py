# mummy/description/store.py
"""
Description store: reading and writing description sidecar files.

Key responsibilities:
- Map a source path (and optional aspect) to its sidecar file
- Load a sidecar, treating missing/corrupt files as "no cache"
- Save a sidecar atomically, creating parent directories

Key non-responsibilities:
- NO freshness decisions (that's the tracker's job)
- NO generation of target content
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from mummy.artifact.description import Description
from mummy.core.paths import MummyPaths
from mummy.description.schema import SCHEMA_VERSION, DescriptionDocument
from mummy.logging.logger import get_logger
from mummy.logging.tags import DESCRIPTION

logger = get_logger(__name__)


class DescriptionStore:
    """
    Sidecar files of one site, rooted in a description directory that
    parallels the site source tree.

    Usage:
        store = DescriptionStore(source_root, description_root)
        description = store.load(source_file)  # None if no usable sidecar
        store.save(source_file, description)
    """

    def __init__(self, source_root: Path, description_root: Path) -> None:
        self._source_root = source_root
        self._description_root = description_root

    @property
    def description_root(self) -> Path:
        return self._description_root

    def description_file(self, source_path: Path, aspect: Optional[str] = None) -> Path:
        """Sidecar location for a source path (and aspect)."""
        return MummyPaths.description_file(
            self._description_root, self._source_root, source_path, aspect
        )

    def load(self, source_path: Path, aspect: Optional[str] = None) -> Optional[Description]:
        """
        Load the persisted description of a source path.

        Returns:
            A CACHED description, or None if there is no usable sidecar.
            An unreadable or invalid sidecar is logged and treated as absent.
        """
        description_file = self.description_file(source_path, aspect)
        if not description_file.is_file():
            return None

        try:
            with description_file.open("r", encoding="utf-8") as f:
                data = json.load(f)
            document = DescriptionDocument.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"{DESCRIPTION} Ignoring unusable description `{description_file}`: {e}")
            return None

        if document.schema_version != SCHEMA_VERSION:
            logger.info(
                f"{DESCRIPTION} Ignoring description `{description_file}` with schema "
                f"version {document.schema_version}"
            )
            return None

        return document.to_description()

    def save(self, source_path: Path, description: Description, aspect: Optional[str] = None) -> Path:
        """
        Write a description to its sidecar as-is.

        The write goes through a temp file and a rename; a failure leaves any
        previous sidecar untouched.

        Returns:
            The sidecar path

        Raises:
            OSError: If the sidecar cannot be written
        """
        description_file = self.description_file(source_path, aspect)
        document = DescriptionDocument.from_description(description)

        with MummyPaths.atomic_target(description_file) as temp_path:
            with temp_path.open("w", encoding="utf-8") as f:
                json.dump(document.to_json(), f, indent=2, ensure_ascii=False)
                f.write("\n")

        logger.debug(f"{DESCRIPTION} Saved description `{description_file}`")
        return description_file

    def __repr__(self) -> str:
        return f"DescriptionStore({self._description_root})"


__all__ = ["DescriptionStore"]
