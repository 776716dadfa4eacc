# mummy/config/schema.py
"""
Configuration schemas for a site build.

This module defines Pydantic models for:
- AspectConfig: Per-aspect image processing settings
- ImageConfig: Image mummifier settings
- MummyConfig: Top-level build configuration
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SCALE_MAX_LENGTH = 2560
DEFAULT_COMPRESSION_QUALITY = 0.8
DEFAULT_PROCESS_THRESHOLD_FILE_SIZE = 800_000


class AspectConfig(BaseModel):
    """
    Image processing settings of one aspect (e.g. "preview").

    Example YAML:
        aspects:
          preview:
            scale_max_length: 800
            compression_quality: 0.6
    """

    model_config = ConfigDict(extra="forbid")

    scale_max_length: int = Field(default=DEFAULT_SCALE_MAX_LENGTH, gt=0)
    compression_quality: float = Field(default=DEFAULT_COMPRESSION_QUALITY, ge=0.0, le=1.0)


class ImageConfig(BaseModel):
    """Image mummifier settings."""

    model_config = ConfigDict(extra="forbid")

    process_threshold_file_size: int = Field(
        default=DEFAULT_PROCESS_THRESHOLD_FILE_SIZE,
        ge=0,
        description="Images larger than this many bytes are scaled and get aspects",
    )
    scale_max_length: int = Field(default=DEFAULT_SCALE_MAX_LENGTH, gt=0)
    compression_quality: float = Field(default=DEFAULT_COMPRESSION_QUALITY, ge=0.0, le=1.0)
    with_aspects: List[str] = Field(
        default_factory=list, description="Aspect ids generated for large images"
    )
    aspects: Dict[str, AspectConfig] = Field(default_factory=dict)

    @field_validator("with_aspects")
    @classmethod
    def validate_aspect_ids(cls, v: List[str]) -> List[str]:
        """Aspect ids end up in filenames, so keep them simple."""
        for aspect in v:
            if not aspect or not aspect.replace("-", "").replace("_", "").isalnum():
                raise ValueError(f"Invalid aspect id: {aspect!r}")
        return list(dict.fromkeys(v))

    def aspect_config(self, aspect: Optional[str]) -> AspectConfig:
        """
        Effective settings for an aspect, or for the primary image if None.

        Aspects without their own section use the built-in defaults.
        """
        if aspect is None:
            return AspectConfig(
                scale_max_length=self.scale_max_length,
                compression_quality=self.compression_quality,
            )
        return self.aspects.get(aspect) or AspectConfig()


class MummyConfig(BaseModel):
    """
    Central configuration of a site build.

    Example YAML:
        content_base_names: [index]
        ignore: ["*.bak", ".git"]
        keep_going: true
        image:
          process_threshold_file_size: 800000
          with_aspects: [preview]
          aspects:
            preview:
              scale_max_length: 800
    """

    model_config = ConfigDict(extra="forbid")

    content_base_names: List[str] = Field(
        default_factory=lambda: ["index"],
        description="Base names of files that become a directory's content artifact",
    )
    ignore: List[str] = Field(
        default_factory=list, description="Glob patterns of source entry names to skip"
    )
    description_directory: Optional[Path] = Field(
        default=None,
        description="Root of the sidecar tree; defaults to a sibling of the target root",
    )
    keep_going: bool = Field(
        default=True,
        description="Continue with sibling artifacts after one fails",
    )
    image: ImageConfig = Field(default_factory=ImageConfig)


__all__ = [
    "AspectConfig",
    "ImageConfig",
    "MummyConfig",
    "DEFAULT_SCALE_MAX_LENGTH",
    "DEFAULT_COMPRESSION_QUALITY",
    "DEFAULT_PROCESS_THRESHOLD_FILE_SIZE",
]
