# mummy/mummify/__init__.py
"""
Mummifiers: planners and generators per resource type.

Key exports:
- plan: Build the artifact graph for a source path
- DirectoryMummifier: Directory composition
- OpaqueFileMummifier: Copy-through default
- XhtmlPageMummifier: XHTML pages (lxml)
- ImageMummifier: Images and their aspects (Pillow)
"""

from mummy.mummify.base import ContentGenerator, FileMummifier, Mummifier, Planner
from mummy.mummify.directory import DirectoryMummifier, check_distinct_targets, plan
from mummy.mummify.image import ImageMummifier, scaled_dimensions
from mummy.mummify.image_metadata import ImageMetadataExtractor
from mummy.mummify.opaque import OpaqueFileMummifier
from mummy.mummify.page import DocumentLoader, ReferenceRelocator, XhtmlPageMummifier

__all__ = [
    "plan",
    "check_distinct_targets",
    "Planner",
    "ContentGenerator",
    "Mummifier",
    "FileMummifier",
    "DirectoryMummifier",
    "OpaqueFileMummifier",
    "XhtmlPageMummifier",
    "DocumentLoader",
    "ReferenceRelocator",
    "ImageMummifier",
    "ImageMetadataExtractor",
    "scaled_dimensions",
]
