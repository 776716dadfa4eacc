# mummy/description/schema.py
"""
Sidecar document schema.

Defines the Pydantic models of a persisted description:

    {
      "schema_version": 1,
      "properties": {
        "urn:mummy:sourceModifiedAt": {"type": "timestamp", "value": "2024-05-01T10:00:00.123456Z"},
        "http://purl.org/dc/terms/title": {"type": "string", "value": "Gate and Turret"}
      }
    }

Values carry an explicit type so that a round trip reproduces the exact
Python value (a timestamp never comes back as a string, a bool never as 1).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mummy.artifact.description import Description, DescriptionState
from mummy.artifact.vocab import PROPERTY_TAG_DIRTY

SCHEMA_VERSION = 1


class ValueType(str, Enum):
    """Type of a persisted scalar."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DECIMAL = "decimal"
    TIMESTAMP = "timestamp"


_PYTHON_TYPES = {
    ValueType.STRING: str,
    ValueType.BOOLEAN: bool,
    ValueType.INTEGER: int,
    ValueType.DECIMAL: float,
    ValueType.TIMESTAMP: datetime,
}


class TypedValue(BaseModel):
    """One persisted property value."""

    model_config = ConfigDict(extra="forbid")

    type: ValueType
    value: Any

    @model_validator(mode="after")
    def coerce_value(self) -> "TypedValue":
        """Convert the JSON value back into the Python type named by `type`."""
        value = self.value
        if self.type is ValueType.TIMESTAMP:
            if isinstance(value, str):
                value = datetime.fromisoformat(value.replace("Z", "+00:00"))
            if not isinstance(value, datetime) or value.tzinfo is None:
                raise ValueError("timestamp values must be timezone-aware ISO 8601 strings")
        elif self.type is ValueType.DECIMAL:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError("decimal values must be numbers")
            value = float(value)
        else:
            expected = _PYTHON_TYPES[self.type]
            # bool is an int subclass; never accept one for the other
            if not isinstance(value, expected) or (
                self.type is ValueType.INTEGER and isinstance(value, bool)
            ):
                raise ValueError(f"{self.type.value} value expected, got {type(value).__name__}")
        self.value = value
        return self

    @classmethod
    def of(cls, value: Any) -> "TypedValue":
        """Wrap a Python scalar."""
        if isinstance(value, bool):
            return cls(type=ValueType.BOOLEAN, value=value)
        if isinstance(value, int):
            return cls(type=ValueType.INTEGER, value=value)
        if isinstance(value, float):
            return cls(type=ValueType.DECIMAL, value=value)
        if isinstance(value, datetime):
            return cls(type=ValueType.TIMESTAMP, value=value)
        if isinstance(value, str):
            return cls(type=ValueType.STRING, value=value)
        raise TypeError(f"Unsupported description value type: {type(value).__name__}")

    def to_json(self) -> Dict[str, Any]:
        if self.type is ValueType.TIMESTAMP:
            return {"type": self.type.value, "value": self.value.isoformat()}
        return {"type": self.type.value, "value": self.value}


class DescriptionDocument(BaseModel):
    """Root model of a sidecar file."""

    model_config = ConfigDict(extra="forbid")

    schema_version: int = Field(default=SCHEMA_VERSION, description="Schema version for migrations")
    properties: Dict[str, TypedValue] = Field(default_factory=dict)

    @classmethod
    def from_description(cls, description: Description) -> "DescriptionDocument":
        """Build a document, leaving out the dirty marker if one slipped in."""
        return cls(
            properties={
                tag: TypedValue.of(value)
                for tag, value in description.items()
                if tag != PROPERTY_TAG_DIRTY
            }
        )

    def to_description(self) -> Description:
        """A CACHED description holding the persisted properties."""
        return Description(
            {
                tag: typed.value
                for tag, typed in self.properties.items()
                if tag != PROPERTY_TAG_DIRTY
            },
            state=DescriptionState.CACHED,
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "properties": {tag: typed.to_json() for tag, typed in sorted(self.properties.items())},
        }


__all__ = ["DescriptionDocument", "TypedValue", "ValueType", "SCHEMA_VERSION"]
