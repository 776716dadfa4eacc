# mummy/mummify/image_metadata.py
"""
Embedded image metadata extraction.

Returns (tag, value) pairs in precedence order:

    1. XMP   dc:title, dc:description, dc:rights, dc:creator
    2. IPTC  ObjectName (2:05), Caption (2:120), CopyrightNotice (2:116), By-line (2:80)
    3. Exif  XPTitle (0x9C9B), ImageDescription (0x010E), Copyright (0x8298), Artist (0x013B)

The description tracker keeps the first value per tag, so XMP and IPTC
override Exif. Missing or unreadable metadata is never an error; images
without it simply describe themselves with fewer properties.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from lxml import etree
from PIL import Image, IptcImagePlugin

from mummy.artifact.vocab import (
    PROPERTY_TAG_COPYRIGHT,
    PROPERTY_TAG_CREATOR,
    PROPERTY_TAG_DESCRIPTION,
    PROPERTY_TAG_TITLE,
)
from mummy.logging.logger import get_logger
from mummy.logging.tags import IMAGE

logger = get_logger(__name__)

MetadataPairs = List[Tuple[str, Any]]

XMP_NAMESPACES = {
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "dc": "http://purl.org/dc/elements/1.1/",
    "xml": "http://www.w3.org/XML/1998/namespace",
}

XMP_PROPERTIES = {
    "dc:title": PROPERTY_TAG_TITLE,
    "dc:description": PROPERTY_TAG_DESCRIPTION,
    "dc:rights": PROPERTY_TAG_COPYRIGHT,
    "dc:creator": PROPERTY_TAG_CREATOR,
}

IPTC_PROPERTIES = {
    (2, 5): PROPERTY_TAG_TITLE,
    (2, 120): PROPERTY_TAG_DESCRIPTION,
    (2, 116): PROPERTY_TAG_COPYRIGHT,
    (2, 80): PROPERTY_TAG_CREATOR,
}

EXIF_PROPERTIES = {
    0x9C9B: PROPERTY_TAG_TITLE,  # XPTitle
    0x010E: PROPERTY_TAG_DESCRIPTION,  # ImageDescription
    0x8298: PROPERTY_TAG_COPYRIGHT,  # Copyright
    0x013B: PROPERTY_TAG_CREATOR,  # Artist
}

EXIF_XP_TAGS = {0x9C9B}


# =============================================================================
# Value Decoding
# =============================================================================


def _decode_text(raw: Any) -> Optional[str]:
    """Decode an IPTC/Exif text value; None if empty."""
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    if raw is None:
        return None
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            text = raw.decode("latin-1")
    else:
        text = str(raw)
    text = text.strip("\x00").strip()
    return text or None


def _decode_xp_text(raw: Any) -> Optional[str]:
    """Windows XP* Exif tags are UTF-16LE, sometimes delivered as a tuple of ints."""
    if isinstance(raw, tuple):
        raw = bytes(raw)
    if isinstance(raw, bytes):
        return _decode_text(raw.decode("utf-16-le", errors="ignore"))
    return _decode_text(raw)


# =============================================================================
# Extractor
# =============================================================================


class ImageMetadataExtractor:
    """
    Reads XMP, IPTC and Exif metadata from an image file.

    Usage:
        pairs = ImageMetadataExtractor().extract(Path("photo.jpg"))
        # [("http://purl.org/dc/terms/title", "Gate and Turret"), ...]
    """

    def extract(self, path: Path) -> MetadataPairs:
        try:
            with Image.open(path) as image:
                pairs: MetadataPairs = []
                pairs.extend(self.extract_xmp(image))
                pairs.extend(self.extract_iptc(image))
                pairs.extend(self.extract_exif(image))
                return pairs
        except (OSError, Image.DecompressionBombError) as e:
            logger.warning(f"{IMAGE} Cannot read metadata of `{path}`: {e}")
            return []

    def extract_xmp(self, image: Image.Image) -> MetadataPairs:
        packet = image.info.get("xmp") or image.info.get("XML:com.adobe.xmp")
        if not packet:
            return []
        if isinstance(packet, str):
            packet = packet.encode("utf-8")

        parser = etree.XMLParser(resolve_entities=False, no_network=True, recover=True)
        try:
            root = etree.fromstring(packet.strip(b"\x00 \r\n\t"), parser=parser)
        except etree.XMLSyntaxError as e:
            logger.debug(f"{IMAGE} Ignoring malformed XMP packet: {e}")
            return []
        if root is None:
            return []

        pairs: MetadataPairs = []
        for xmp_name, tag in XMP_PROPERTIES.items():
            value = self._xmp_text(root, xmp_name)
            if value is not None:
                pairs.append((tag, value))
        return pairs

    @staticmethod
    def _xmp_text(root: Any, xmp_name: str) -> Optional[str]:
        """First value of a dc property, preferring the x-default language alternative."""
        for element in root.iterfind(f".//{xmp_name}", namespaces=XMP_NAMESPACES):
            items = element.findall(".//rdf:li", namespaces=XMP_NAMESPACES)
            for item in items:
                if item.get(f"{{{XMP_NAMESPACES['xml']}}}lang") == "x-default":
                    return _decode_text(item.text)
            if items:
                return _decode_text(items[0].text)
            return _decode_text(element.text)
        return None

    def extract_iptc(self, image: Image.Image) -> MetadataPairs:
        info: Optional[Dict[Tuple[int, int], Any]] = IptcImagePlugin.getiptcinfo(image)
        if not info:
            return []
        pairs: MetadataPairs = []
        for key, tag in IPTC_PROPERTIES.items():
            value = _decode_text(info.get(key))
            if value is not None:
                pairs.append((tag, value))
        return pairs

    def extract_exif(self, image: Image.Image) -> MetadataPairs:
        exif = image.getexif()
        pairs: MetadataPairs = []
        for exif_tag, tag in EXIF_PROPERTIES.items():
            raw = exif.get(exif_tag)
            value = _decode_xp_text(raw) if exif_tag in EXIF_XP_TAGS else _decode_text(raw)
            if value is not None:
                pairs.append((tag, value))
        return pairs


__all__ = ["ImageMetadataExtractor"]
