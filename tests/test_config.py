# tests/test_config.py
"""
Tests for layered configuration loading.
"""

from pathlib import Path

import pytest

from mummy.config.loader import (
    SITE_CONFIG_FILENAME,
    deep_merge,
    get_config_source,
    load_config,
    load_defaults,
)
from mummy.config.schema import AspectConfig, MummyConfig
from mummy.core.exceptions import MummyConfigError


class TestDeepMerge:
    def test_nested_values_merge(self):
        result = deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        assert result == {"a": 1, "b": {"c": 10, "d": 3}}

    def test_lists_are_replaced(self):
        assert deep_merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}


class TestDefaults:
    def test_defaults_validate(self):
        config = MummyConfig.model_validate(load_defaults())

        assert config.content_base_names == ["index"]
        assert config.keep_going is True
        assert config.image.process_threshold_file_size == 800_000
        assert config.image.scale_max_length == 2560
        assert config.image.compression_quality == 0.8
        assert config.image.with_aspects == []
        assert ".git" in config.ignore

    def test_load_without_site_file(self, source_root):
        config = load_config(source_root=source_root)
        assert config.image.aspects["preview"].scale_max_length == 800


class TestSiteConfig:
    def test_site_file_overrides_defaults(self, source_root):
        (source_root / SITE_CONFIG_FILENAME).write_text(
            "mummy:\n"
            "  keep_going: false\n"
            "  image:\n"
            "    with_aspects: [preview]\n"
            "    aspects:\n"
            "      preview:\n"
            "        compression_quality: 0.5\n"
        )

        config = load_config(source_root=source_root)

        assert config.keep_going is False
        assert config.image.with_aspects == ["preview"]
        assert config.image.aspects["preview"].compression_quality == 0.5
        # merged, not replaced
        assert config.image.aspects["preview"].scale_max_length == 800
        assert config.image.scale_max_length == 2560

    def test_flat_file_without_section(self, tmp_path):
        path = tmp_path / "flat.yaml"
        path.write_text("content_base_names: [index, default]\n")

        config = load_config(config_path=path)

        assert config.content_base_names == ["index", "default"]

    def test_explicit_file_missing(self, tmp_path):
        with pytest.raises(MummyConfigError, match="not found"):
            load_config(config_path=tmp_path / "missing.yaml")

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("mummy:\n  no_such_option: 1\n")

        with pytest.raises(MummyConfigError, match="Invalid configuration"):
            load_config(config_path=path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("mummy: [unclosed\n")

        with pytest.raises(MummyConfigError):
            load_config(config_path=path)

    def test_invalid_aspect_id(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("mummy:\n  image:\n    with_aspects: ['../escape']\n")

        with pytest.raises(MummyConfigError):
            load_config(config_path=path)

    def test_config_source(self, source_root):
        assert "package defaults" in get_config_source(source_root=source_root)
        (source_root / SITE_CONFIG_FILENAME).write_text("mummy: {}\n")
        assert str(source_root / SITE_CONFIG_FILENAME) in get_config_source(source_root=source_root)


class TestAspectConfig:
    def test_primary_settings(self):
        config = MummyConfig.model_validate({"image": {"scale_max_length": 1000}})
        assert config.image.aspect_config(None).scale_max_length == 1000

    def test_unconfigured_aspect_uses_defaults(self):
        config = MummyConfig()
        assert config.image.aspect_config("thumb") == AspectConfig()

    def test_description_directory_is_path(self):
        config = MummyConfig.model_validate({"description_directory": "/var/cache/desc"})
        assert config.description_directory == Path("/var/cache/desc")
