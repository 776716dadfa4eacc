# mummy/description/__init__.py
"""
Description caching for incremental mummification.

Key exports:
- DescriptionStore: Load/save description sidecar files
- load_description: Cached-or-fresh description of a source file
- mummify_source_file: Target check, generation and sidecar persistence
"""

from mummy.description.schema import DescriptionDocument, TypedValue, ValueType
from mummy.description.store import DescriptionStore
from mummy.description.tracker import (
    MummifyOutcome,
    is_target_content_dirty,
    load_description,
    mummify_source_file,
)

__all__ = [
    "DescriptionStore",
    "DescriptionDocument",
    "TypedValue",
    "ValueType",
    "MummifyOutcome",
    "load_description",
    "is_target_content_dirty",
    "mummify_source_file",
]
