# tests/test_description_schema.py
"""
Tests for the sidecar document schema.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from mummy.artifact.description import Description, DescriptionState
from mummy.artifact.vocab import (
    PROPERTY_TAG_CONTENT_TYPE,
    PROPERTY_TAG_DIRTY,
    PROPERTY_TAG_SOURCE_MODIFIED_AT,
    PROPERTY_TAG_TITLE,
)
from mummy.description.schema import DescriptionDocument, TypedValue, ValueType

WHEN = datetime(2024, 5, 1, 10, 0, 0, 123456, tzinfo=timezone.utc)


class TestTypedValue:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("text", ValueType.STRING),
            (True, ValueType.BOOLEAN),
            (42, ValueType.INTEGER),
            (0.5, ValueType.DECIMAL),
            (WHEN, ValueType.TIMESTAMP),
        ],
    )
    def test_of_picks_type(self, value, expected):
        assert TypedValue.of(value).type is expected

    def test_timestamp_parses_from_iso_string(self):
        typed = TypedValue.model_validate({"type": "timestamp", "value": "2024-05-01T10:00:00.123456Z"})
        assert typed.value == WHEN

    def test_bool_is_not_an_integer(self):
        with pytest.raises(ValidationError):
            TypedValue.model_validate({"type": "integer", "value": True})

    def test_naive_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            TypedValue.model_validate({"type": "timestamp", "value": "2024-05-01T10:00:00"})

    def test_unsupported_python_value(self):
        with pytest.raises(TypeError):
            TypedValue.of(None)


class TestDescriptionDocument:
    def test_to_json_shape(self):
        description = Description({PROPERTY_TAG_TITLE: "Gate", PROPERTY_TAG_SOURCE_MODIFIED_AT: WHEN})
        data = DescriptionDocument.from_description(description).to_json()

        assert data["schema_version"] == 1
        assert data["properties"][PROPERTY_TAG_TITLE] == {"type": "string", "value": "Gate"}
        assert data["properties"][PROPERTY_TAG_SOURCE_MODIFIED_AT] == {
            "type": "timestamp",
            "value": "2024-05-01T10:00:00.123456+00:00",
        }

    def test_round_trip_strips_dirty_marker(self):
        description = Description(
            {
                PROPERTY_TAG_TITLE: "Gate",
                PROPERTY_TAG_CONTENT_TYPE: "image/jpeg",
                PROPERTY_TAG_SOURCE_MODIFIED_AT: WHEN,
                PROPERTY_TAG_DIRTY: True,
            }
        )
        document = DescriptionDocument.from_description(description)
        restored = DescriptionDocument.model_validate(document.to_json()).to_description()

        assert PROPERTY_TAG_DIRTY not in restored.properties()
        assert restored.get(PROPERTY_TAG_SOURCE_MODIFIED_AT) == WHEN
        assert restored.get(PROPERTY_TAG_TITLE) == "Gate"
        assert restored.state is DescriptionState.CACHED

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            DescriptionDocument.model_validate({"schema_version": 1, "properties": {}, "extra": 1})
