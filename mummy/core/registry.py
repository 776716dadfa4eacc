# mummy/core/registry.py
"""
Mummifier registry.

Maps source files to the mummifier responsible for them:

    ┌─────────────────────────────────────┐
    │         MummifierRegistry           │
    │  Routes files by filename extension │
    └─────────────────────────────────────┘
                    │
       ┌────────────┼──────────────┐
       │            │              │
       ▼            ▼              ▼
  XhtmlPage      Image          OpaqueFile
 (.xhtml,.html) (.jpg,.png...)  (everything else)

The registry is built once before a build and frozen while the build runs,
so it can be shared without locking.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

from mummy.core.exceptions import RegistryFrozenError
from mummy.core.paths import MummyPaths
from mummy.logging.logger import get_logger

if TYPE_CHECKING:
    from mummy.mummify.base import Mummifier

logger = get_logger(__name__)


def normalize_extension(ext: str) -> str:
    """Lower-case an extension and drop any leading dot (`.JPG` -> `jpg`)."""
    return ext.lower().lstrip(".")


class MummifierRegistry:
    """
    File mummifiers by extension, plus default file and directory mummifiers.

    Usage:
        registry = MummifierRegistry()
        registry.register_file_mummifier(XhtmlPageMummifier())
        mummifier = registry.get_mummifier_for_file(Path("index.xhtml"))
    """

    def __init__(
        self,
        default_file_mummifier: Optional["Mummifier"] = None,
        default_directory_mummifier: Optional["Mummifier"] = None,
    ) -> None:
        if default_file_mummifier is None:
            from mummy.mummify.opaque import OpaqueFileMummifier

            default_file_mummifier = OpaqueFileMummifier()
        if default_directory_mummifier is None:
            from mummy.mummify.directory import DirectoryMummifier

            default_directory_mummifier = DirectoryMummifier()

        self._default_file_mummifier = default_file_mummifier
        self._default_directory_mummifier = default_directory_mummifier
        self._file_mummifiers_by_extension: Dict[str, "Mummifier"] = {}
        self._frozen = False

    @classmethod
    def with_defaults(cls) -> "MummifierRegistry":
        """A registry with the standard page and image mummifiers registered."""
        from mummy.mummify.image import ImageMummifier
        from mummy.mummify.page import XhtmlPageMummifier

        registry = cls()
        registry.register_file_mummifier(XhtmlPageMummifier())
        registry.register_file_mummifier(ImageMummifier())
        return registry

    def register_file_mummifier(self, mummifier: "Mummifier") -> None:
        """
        Register a mummifier for all its supported filename extensions.

        A later registration for an extension replaces the earlier one.

        Raises:
            RegistryFrozenError: If the registry is in use by a build
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {mummifier.plugin_name!r}: registry is frozen."
            )

        for ext in mummifier.supported_extensions:
            normalized = normalize_extension(ext)
            existing = self._file_mummifiers_by_extension.get(normalized)
            if existing is not None and existing is not mummifier:
                logger.debug(
                    f"Extension {normalized!r}: {mummifier.plugin_name!r} replaces "
                    f"{existing.plugin_name!r}"
                )
            self._file_mummifiers_by_extension[normalized] = mummifier

    def find_mummifier_for_file(self, path: Path) -> Optional["Mummifier"]:
        """
        The registered mummifier for a file, trying the most specific extension first.

        `photo.tar.gz` is looked up as `tar.gz` and then `gz`.
        """
        for ext in MummyPaths.filename_extensions(path.name):
            mummifier = self._file_mummifiers_by_extension.get(ext.lower())
            if mummifier is not None:
                return mummifier
        return None

    def get_mummifier_for_file(self, path: Path) -> "Mummifier":
        """The registered mummifier for a file, or the default file mummifier."""
        mummifier = self.find_mummifier_for_file(path)
        return mummifier if mummifier is not None else self._default_file_mummifier

    def get_mummifier_for_directory(self, path: Path) -> "Mummifier":
        """Directories are not registered by name; always the default."""
        return self._default_directory_mummifier

    @property
    def default_file_mummifier(self) -> "Mummifier":
        return self._default_file_mummifier

    @property
    def default_directory_mummifier(self) -> "Mummifier":
        return self._default_directory_mummifier

    @property
    def registered_extensions(self) -> List[str]:
        return sorted(self._file_mummifiers_by_extension.keys())

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def __repr__(self) -> str:
        ext_list = ", ".join(self.registered_extensions) or "(none)"
        return (
            f"MummifierRegistry(default={self._default_file_mummifier.plugin_name}, "
            f"extensions=[{ext_list}])"
        )


__all__ = ["MummifierRegistry", "normalize_extension"]
