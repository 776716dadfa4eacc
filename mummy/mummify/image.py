# mummy/mummify/image.py
"""
Image mummifier with derived aspect artifacts.

Images larger than the configured file-size threshold are scaled down and
re-encoded; smaller ones are copied. Large images additionally fan out into
one aspect artifact per configured aspect id:

    photo.jpg  ->  photo.jpg            primary (scaled if over max length)
               ->  photo-preview.jpg    aspect "preview" (always re-encoded)

Each aspect has its own description sidecar. Aspects are never cached
against the primary: their recorded target time is cleared before every
mummification so they are always regenerated.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Optional, Tuple

from PIL import Image

from mummy.artifact.models import Artifact
from mummy.core.paths import MummyPaths
from mummy.description.tracker import mummify_source_file
from mummy.logging.logger import get_logger
from mummy.logging.tags import IMAGE
from mummy.mummify.base import MetadataPairs, copy_source, plan_source_file
from mummy.mummify.image_metadata import ImageMetadataExtractor

if TYPE_CHECKING:
    from mummy.core.context import MummyContext

logger = get_logger(__name__)

MEDIA_TYPES: Dict[str, str] = {
    "gif": "image/gif",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
}

# Pixel modes each writer accepts without conversion
ENCODABLE_MODES: Dict[str, FrozenSet[str]] = {
    "JPEG": frozenset({"L", "RGB", "CMYK"}),
    "PNG": frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}),
    "GIF": frozenset({"1", "L", "P"}),
}

ALPHA_FORMATS = frozenset({"PNG", "GIF"})
QUALITY_FORMATS = frozenset({"JPEG"})


def scaled_dimensions(width: int, height: int, max_length: int) -> Tuple[int, int]:
    """
    Dimensions bounded by max_length, keeping the aspect ratio.

    The larger side becomes exactly max_length; the smaller side is floored
    so it never exceeds the bound through rounding, and is at least 1.

    >>> scaled_dimensions(4000, 2000, 2560)
    (2560, 1280)
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image dimensions {width}x{height}.")
    if max_length <= 0:
        raise ValueError(f"Invalid maximum length {max_length}.")
    if width >= height:
        return max_length, max(1, height * max_length // width)
    return max(1, width * max_length // height), max_length


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info


def _encodable(image: Image.Image, image_format: str) -> Image.Image:
    """Convert the pixel mode to RGB or RGBA if the writer cannot take it as is."""
    modes = ENCODABLE_MODES.get(image_format)
    if modes is None or image.mode in modes:
        return image
    if image_format == "GIF":
        # the GIF writer quantizes RGB(A) itself
        return image.convert("RGBA" if _has_alpha(image) else "RGB")
    if _has_alpha(image) and image_format in ALPHA_FORMATS:
        return image.convert("RGBA")
    return image.convert("RGB")


class ImageMummifier:
    """Scales large images and generates their configured aspects."""

    plugin_name = "image"

    def __init__(self, metadata_extractor: Optional[ImageMetadataExtractor] = None) -> None:
        self.metadata_extractor = metadata_extractor or ImageMetadataExtractor()

    @property
    def supported_extensions(self) -> FrozenSet[str]:
        return frozenset(MEDIA_TYPES)

    # =========================================================================
    # Planning
    # =========================================================================

    @staticmethod
    def _is_over_threshold(context: "MummyContext", source_file: Path) -> bool:
        return source_file.stat().st_size > context.config.image.process_threshold_file_size

    @staticmethod
    def aspect_target_path(target_path: Path, aspect: str) -> Path:
        """`photo.jpg` with aspect `preview` -> `photo-preview.jpg`."""
        return MummyPaths.with_name_suffix(target_path, f"-{aspect}")

    def plan(self, context: "MummyContext", source_path: Path) -> Artifact:
        artifact = plan_source_file(context, self, source_path)

        with_aspects = context.config.image.with_aspects
        if not with_aspects or not self._is_over_threshold(context, source_path):
            return artifact

        aspects = tuple(
            plan_source_file(
                context,
                self,
                source_path,
                aspect=aspect,
                target_path=self.aspect_target_path(artifact.target_path, aspect),
            )
            for aspect in with_aspects
        )
        logger.debug(f"{IMAGE} Planned aspects {list(with_aspects)} for `{source_path}`")
        return dataclasses.replace(artifact, aspects=aspects)

    def load_source_metadata(self, context: "MummyContext", source_file: Path) -> MetadataPairs:
        return self.metadata_extractor.extract(source_file)

    def get_artifact_media_type(self, context: "MummyContext", source_file: Path) -> Optional[str]:
        return MEDIA_TYPES.get(source_file.suffix.lstrip(".").lower())

    # =========================================================================
    # Generation
    # =========================================================================

    def mummify(self, context: "MummyContext", artifact: Artifact) -> None:
        mummify_source_file(context, artifact, self.mummify_file)
        for aspect in artifact.aspects:
            aspect.description.target_modified_at = None
            mummify_source_file(context, aspect, self.mummify_file)

    def mummify_file(self, context: "MummyContext", artifact: Artifact) -> None:
        if artifact.aspect is not None or self._is_over_threshold(context, artifact.source_path):
            self.process_image(context, artifact)
        else:
            copy_source(artifact)

    def process_image(self, context: "MummyContext", artifact: Artifact) -> None:
        """
        Scale and re-encode the source image into the artifact target.

        Raises:
            OSError: If the image cannot be decoded or encoded
        """
        source_path = artifact.source_path
        settings = context.config.image.aspect_config(artifact.aspect)
        max_length = settings.scale_max_length

        try:
            with Image.open(source_path) as image:
                image.load()
                image_format = image.format
                width, height = image.size

                if width <= max_length and height <= max_length:
                    if artifact.aspect is None:
                        logger.debug(f"{IMAGE} `{source_path}` within {max_length}px, copying")
                        copy_source(artifact)
                        return
                    result = image
                else:
                    new_size = scaled_dimensions(width, height, max_length)
                    logger.debug(
                        f"{IMAGE} Scaling `{source_path}` from {width}x{height} to "
                        f"{new_size[0]}x{new_size[1]}"
                    )
                    decoded = image
                    if image.mode in ("1", "P"):
                        # palette images only support nearest-neighbor resampling
                        decoded = image.convert("RGBA" if _has_alpha(image) else "RGB")
                    result = decoded.resize(new_size, Image.Resampling.BICUBIC)

                result = _encodable(result, image_format)
                with MummyPaths.atomic_target(artifact.target_path) as temp_path:
                    result.save(
                        temp_path,
                        format=image_format,
                        **self._save_options(image, image_format, settings.compression_quality),
                    )
        except OSError as e:
            raise OSError(f"Error processing image `{source_path}`: {e}") from e

    @staticmethod
    def _save_options(image: Image.Image, image_format: str, compression_quality: float) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if image_format in QUALITY_FORMATS:
            options["quality"] = round(compression_quality * 100)
        icc_profile = image.info.get("icc_profile")
        if icc_profile and image_format in ("JPEG", "PNG"):
            options["icc_profile"] = icc_profile
        return options

    def __repr__(self) -> str:
        return f"ImageMummifier(extensions={sorted(self.supported_extensions)})"


__all__ = ["ImageMummifier", "scaled_dimensions", "MEDIA_TYPES"]
