# mummy/artifact/description.py
"""
Artifact descriptions.

A Description is a property bag of URI-tagged scalar values (str, bool, int,
float, aware datetime) plus an explicit DescriptionState recording whether the
bag matches what is persisted in its sidecar. The state is kept outside the
property space, so it can never end up in a persisted document.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from mummy.artifact.vocab import (
    PROPERTY_TAG_ASPECT,
    PROPERTY_TAG_CONTENT_TYPE,
    PROPERTY_TAG_SOURCE_MODIFIED_AT,
    PROPERTY_TAG_TARGET_MODIFIED_AT,
)

SCALAR_TYPES = (str, bool, int, float, datetime)


class DescriptionState(str, Enum):
    """Whether a description matches its persisted sidecar."""

    CACHED = "cached"
    FRESH = "fresh"


class Description:
    """
    Mutable description of one artifact.

    Usage:
        description = Description()
        description.add_first(PROPERTY_TAG_TITLE, "Gate and Turret")
        description.target_modified_at = MummyPaths.modified_at(target)
    """

    def __init__(
        self,
        properties: Optional[Dict[str, Any]] = None,
        state: DescriptionState = DescriptionState.FRESH,
    ) -> None:
        self._properties: Dict[str, Any] = {}
        for tag, value in (properties or {}).items():
            self.set(tag, value)
        self.state = state

    # =========================================================================
    # Property Access
    # =========================================================================

    def has(self, tag: str) -> bool:
        return tag in self._properties

    def get(self, tag: str) -> Any:
        """Get a property value; raises KeyError if absent."""
        return self._properties[tag]

    def find(self, tag: str, default: Any = None) -> Any:
        return self._properties.get(tag, default)

    def set(self, tag: str, value: Any) -> None:
        if not isinstance(value, SCALAR_TYPES):
            raise TypeError(
                f"Unsupported value type {type(value).__name__} for property `{tag}`."
            )
        if isinstance(value, datetime) and value.tzinfo is None:
            raise ValueError(f"Timestamp for property `{tag}` must be timezone-aware.")
        self._properties[tag] = value

    def remove(self, tag: str) -> Any:
        """Remove a property if present, returning its old value (or None)."""
        return self._properties.pop(tag, None)

    def add_first(self, tag: str, value: Any) -> bool:
        """
        Set a property only if it is not present yet; the first property wins.

        Returns:
            True if the value was added
        """
        if tag in self._properties:
            return False
        self.set(tag, value)
        return True

    def add_all_first(self, pairs: Iterable[Tuple[str, Any]]) -> None:
        """Add (tag, value) pairs in order with first-property-wins semantics."""
        for tag, value in pairs:
            self.add_first(tag, value)

    def items(self) -> Iterator[Tuple[str, Any]]:
        return iter(list(self._properties.items()))

    def properties(self) -> Dict[str, Any]:
        """A copy of all properties."""
        return dict(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Description):
            return NotImplemented
        return self._properties == other._properties

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Description(state={self.state.value}, properties={self._properties!r})"

    # =========================================================================
    # Well-Known Properties
    # =========================================================================

    @property
    def source_modified_at(self) -> Optional[datetime]:
        return self._properties.get(PROPERTY_TAG_SOURCE_MODIFIED_AT)

    @property
    def target_modified_at(self) -> Optional[datetime]:
        return self._properties.get(PROPERTY_TAG_TARGET_MODIFIED_AT)

    @target_modified_at.setter
    def target_modified_at(self, value: Optional[datetime]) -> None:
        if value is None:
            self.remove(PROPERTY_TAG_TARGET_MODIFIED_AT)
        else:
            self.set(PROPERTY_TAG_TARGET_MODIFIED_AT, value)

    @property
    def aspect(self) -> Optional[str]:
        return self._properties.get(PROPERTY_TAG_ASPECT)

    @property
    def content_type(self) -> Optional[str]:
        return self._properties.get(PROPERTY_TAG_CONTENT_TYPE)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def is_dirty(self) -> bool:
        """True if this description still has to be persisted."""
        return self.state is DescriptionState.FRESH

    def mark_dirty(self) -> None:
        self.state = DescriptionState.FRESH

    def mark_clean(self) -> None:
        self.state = DescriptionState.CACHED


__all__ = ["Description", "DescriptionState", "SCALAR_TYPES"]
