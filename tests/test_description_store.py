# tests/test_description_store.py
"""
Tests for DescriptionStore: sidecar location, load and save.
"""

import json

from mummy.artifact.description import Description, DescriptionState
from mummy.artifact.vocab import (
    PROPERTY_TAG_ASPECT,
    PROPERTY_TAG_DIRTY,
    PROPERTY_TAG_SOURCE_MODIFIED_AT,
    PROPERTY_TAG_TITLE,
)
from mummy.core.paths import MummyPaths
from mummy.description.store import DescriptionStore


def _store(tmp_path):
    source_root = tmp_path / "src"
    source_root.mkdir()
    return source_root, DescriptionStore(source_root, tmp_path / "desc")


class TestLoad:
    def test_missing_sidecar_is_none(self, tmp_path):
        source_root, store = _store(tmp_path)
        assert store.load(source_root / "a.txt") is None

    def test_corrupt_sidecar_is_none(self, tmp_path):
        source_root, store = _store(tmp_path)
        sidecar = store.description_file(source_root / "a.txt")
        sidecar.parent.mkdir(parents=True)
        sidecar.write_text("{not json")

        assert store.load(source_root / "a.txt") is None

    def test_invalid_document_is_none(self, tmp_path):
        source_root, store = _store(tmp_path)
        sidecar = store.description_file(source_root / "a.txt")
        sidecar.parent.mkdir(parents=True)
        sidecar.write_text(json.dumps({"properties": {"x": {"type": "integer", "value": "nope"}}}))

        assert store.load(source_root / "a.txt") is None

    def test_other_schema_version_is_none(self, tmp_path):
        source_root, store = _store(tmp_path)
        sidecar = store.description_file(source_root / "a.txt")
        sidecar.parent.mkdir(parents=True)
        sidecar.write_text(json.dumps({"schema_version": 99, "properties": {}}))

        assert store.load(source_root / "a.txt") is None


class TestSave:
    def test_round_trip(self, tmp_path):
        source_root, store = _store(tmp_path)
        source = source_root / "blog" / "a.txt"
        description = Description({PROPERTY_TAG_TITLE: "A"})
        source.parent.mkdir()
        source.write_text("a")
        description.set(PROPERTY_TAG_SOURCE_MODIFIED_AT, MummyPaths.modified_at(source))

        saved = store.save(source, description)
        loaded = store.load(source)

        assert saved == tmp_path / "desc" / "blog" / "a.txt.json"
        assert loaded == description
        assert loaded.state is DescriptionState.CACHED

    def test_dirty_marker_never_written(self, tmp_path):
        source_root, store = _store(tmp_path)
        description = Description({PROPERTY_TAG_TITLE: "A", PROPERTY_TAG_DIRTY: True})

        saved = store.save(source_root / "a.txt", description)

        data = json.loads(saved.read_text())
        assert PROPERTY_TAG_DIRTY not in data["properties"]
        assert PROPERTY_TAG_TITLE in data["properties"]

    def test_aspect_has_own_sidecar(self, tmp_path):
        source_root, store = _store(tmp_path)
        source = source_root / "photo.jpg"
        store.save(source, Description({PROPERTY_TAG_TITLE: "primary"}))
        store.save(source, Description({PROPERTY_TAG_ASPECT: "preview"}), aspect="preview")

        assert store.load(source).get(PROPERTY_TAG_TITLE) == "primary"
        assert store.load(source, "preview").aspect == "preview"
        assert (tmp_path / "desc" / "photo.jpg.preview.json").is_file()
