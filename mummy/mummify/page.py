# mummy/mummify/page.py
"""
XHTML page mummifier.

Pages are parsed into an lxml document, their relative links are relocated
from the source location to the target location, and the result is
serialized as XHTML. Because the target tree mirrors the source tree, most
links come out unchanged; links to artifacts planned under a different
target name are rewritten to that name.

Metadata harvested from the page head:

    <title>                          -> title
    <meta name="description">        -> description
    <meta name="copyright">          -> rights
    <meta name="author">             -> creator
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, Optional, Protocol, runtime_checkable
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from lxml import etree
from lxml import html as lxml_html

from mummy.artifact.models import Artifact
from mummy.artifact.vocab import (
    PROPERTY_TAG_COPYRIGHT,
    PROPERTY_TAG_CREATOR,
    PROPERTY_TAG_DESCRIPTION,
    PROPERTY_TAG_TITLE,
)
from mummy.core.paths import MummyPaths
from mummy.description.tracker import mummify_source_file
from mummy.logging.logger import get_logger
from mummy.logging.tags import PAGE
from mummy.mummify.base import MetadataPairs, plan_source_file

if TYPE_CHECKING:
    from mummy.core.context import MummyContext

logger = get_logger(__name__)

XHTML_MEDIA_TYPE = "application/xhtml+xml"

REFERENCE_ATTRIBUTES = ("href", "src")

META_PROPERTIES: Dict[str, str] = {
    "description": PROPERTY_TAG_DESCRIPTION,
    "copyright": PROPERTY_TAG_COPYRIGHT,
    "author": PROPERTY_TAG_CREATOR,
}

ReferentPath = Callable[[Path], Optional[Path]]


# =============================================================================
# Capabilities
# =============================================================================


@runtime_checkable
class DocumentLoader(Protocol):
    """Loads a source file into a document model."""

    def load_source_document(self, context: "MummyContext", source_file: Path) -> Any:
        ...


@runtime_checkable
class ReferenceRelocator(Protocol):
    """Rewrites a document's references for a new location."""

    def relocate_document(
        self,
        context: "MummyContext",
        document: Any,
        original_referrer: Path,
        relocated_referrer: Path,
        referent_path: ReferentPath,
    ) -> int:
        ...


# =============================================================================
# Reference Helpers
# =============================================================================


def _is_relative_reference(reference: str) -> bool:
    parts = urlsplit(reference)
    if parts.scheme or parts.netloc:
        return False
    # fragment-only, query-only and root-relative references stay as they are
    return bool(parts.path) and not parts.path.startswith("/")


def relocate_reference(
    reference: str,
    original_referrer: Path,
    relocated_referrer: Path,
    referent_path: ReferentPath,
) -> Optional[str]:
    """
    Relocate one relative reference.

    Returns:
        The rewritten reference, or None if it should be left alone
    """
    if not _is_relative_reference(reference):
        return None

    parts = urlsplit(reference)
    referent = Path(os.path.normpath(original_referrer.parent / unquote(parts.path)))
    relocated_referent = referent_path(referent)
    if relocated_referent is None:
        return None

    relative = Path(os.path.relpath(relocated_referent, relocated_referrer.parent)).as_posix()
    if parts.path.endswith("/") and not relative.endswith("/"):
        relative += "/"
    return urlunsplit(("", "", quote(relative, safe="/"), parts.query, parts.fragment))


# =============================================================================
# Mummifier
# =============================================================================


class XhtmlPageMummifier:
    """Parses, relocates and re-serializes XHTML pages."""

    plugin_name = "page"

    @property
    def supported_extensions(self) -> FrozenSet[str]:
        return frozenset({"xhtml", "html"})

    def plan(self, context: "MummyContext", source_path: Path) -> Artifact:
        return plan_source_file(context, self, source_path)

    def get_artifact_media_type(self, context: "MummyContext", source_file: Path) -> Optional[str]:
        return XHTML_MEDIA_TYPE

    # =========================================================================
    # Document Model
    # =========================================================================

    def load_source_document(self, context: "MummyContext", source_file: Path) -> Any:
        """
        Parse a page into an lxml element tree.

        `.xhtml` files are parsed as XML; `.html` files with the HTML parser.

        Raises:
            OSError: If the file cannot be read or parsed
        """
        if source_file.suffix.lower() == ".html":
            parser = lxml_html.HTMLParser(encoding="utf-8")
        else:
            parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            return etree.parse(str(source_file), parser)
        except etree.LxmlError as e:
            raise OSError(f"Cannot parse page `{source_file}`: {e}") from e

    def load_source_metadata(self, context: "MummyContext", source_file: Path) -> MetadataPairs:
        try:
            document = self.load_source_document(context, source_file)
        except OSError as e:
            logger.warning(f"{PAGE} No metadata for `{source_file}`: {e}")
            return []

        pairs: MetadataPairs = []
        for title in document.xpath("//*[local-name()='title']"):
            text = (title.text or "").strip()
            if text:
                pairs.append((PROPERTY_TAG_TITLE, text))
                break

        for meta in document.xpath("//*[local-name()='meta'][@name and @content]"):
            tag = META_PROPERTIES.get(meta.get("name", "").strip().lower())
            content = meta.get("content", "").strip()
            if tag is not None and content:
                pairs.append((tag, content))
        return pairs

    def relocate_document(
        self,
        context: "MummyContext",
        document: Any,
        original_referrer: Path,
        relocated_referrer: Path,
        referent_path: ReferentPath,
    ) -> int:
        """
        Rewrite relative href/src attributes for a document moved from
        original_referrer to relocated_referrer.

        Args:
            referent_path: Maps the resolved source path of a referent to the
                path the relocated document should link to; None leaves the
                reference unchanged

        Returns:
            Number of references rewritten
        """
        rewritten = 0
        for element in document.iter():
            if not isinstance(element.tag, str):
                continue
            for attribute in REFERENCE_ATTRIBUTES:
                reference = element.get(attribute)
                if not reference:
                    continue
                relocated = relocate_reference(
                    reference, original_referrer, relocated_referrer, referent_path
                )
                if relocated is not None and relocated != reference:
                    element.set(attribute, relocated)
                    rewritten += 1
        return rewritten

    # =========================================================================
    # Generation
    # =========================================================================

    def mummify(self, context: "MummyContext", artifact: Artifact) -> None:
        mummify_source_file(context, artifact, self.mummify_file)

    def mummify_file(self, context: "MummyContext", artifact: Artifact) -> None:
        def referent_path(source_referent: Path) -> Optional[Path]:
            try:
                return context.artifact_target_path(source_referent)
            except ValueError:
                # outside the site; nothing to relocate to
                return None

        document = self.load_source_document(context, artifact.source_path)
        rewritten = self.relocate_document(
            context, document, artifact.source_path, artifact.target_path, referent_path
        )
        if rewritten:
            logger.debug(f"{PAGE} Relocated {rewritten} references in `{artifact.source_path}`")

        with MummyPaths.atomic_target(artifact.target_path) as temp_path:
            document.write(str(temp_path), method="xml", xml_declaration=True, encoding="UTF-8")

    def __repr__(self) -> str:
        return "XhtmlPageMummifier()"


__all__ = [
    "DocumentLoader",
    "ReferenceRelocator",
    "XhtmlPageMummifier",
    "relocate_reference",
    "XHTML_MEDIA_TYPE",
]
