# tests/test_config_manager.py
"""
Tests for generator settings loading and validation
"""
import json

import pytest

from shapegen.utils.config_manager import ConfigManager, GeneratorSettings, MaskingMethod
from shapegen.utils.exceptions import SettingsError


class TestGeneratorSettings:

    def test_defaults(self):
        settings = GeneratorSettings()

        assert settings.max_depth == 10
        assert settings.max_array_items == 5
        assert settings.default_array_count == 3
        assert settings.anonymize is False
        assert settings.preserve_rules == []
        assert settings.seed is None
        assert settings.masking_method is MaskingMethod.FORMAT_PRESERVE
        assert settings.count == 1

    def test_single_rule_becomes_list(self):
        assert GeneratorSettings(preserve_rules="user.id").preserve_rules == ["user.id"]

    def test_masking_method_spelling(self):
        assert GeneratorSettings(masking_method="Format-Preserve").masking_method is MaskingMethod.FORMAT_PRESERVE


class TestConfigManager:

    def setup_method(self):
        self.manager = ConfigManager()

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("max_depth: 4\npreserve_rules:\n  - id\n  - meta.*\nanonymize: true\n")

        settings = self.manager.load_settings(path)

        assert settings.max_depth == 4
        assert settings.preserve_rules == ["id", "meta.*"]
        assert settings.anonymize is True
        assert self.manager.settings is settings

    def test_load_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"seed": 12, "masking_method": "shuffle"}))

        settings = ConfigManager(path).settings

        assert settings.seed == 12
        assert settings.masking_method is MaskingMethod.SHUFFLE

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert self.manager.load_settings(path) == GeneratorSettings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(SettingsError):
            self.manager.load_settings(tmp_path / "missing.yaml")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("seed = 1")
        with pytest.raises(SettingsError):
            self.manager.load_settings(path)

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        with pytest.raises(SettingsError):
            self.manager.load_settings(path)

    def test_invalid_values(self):
        with pytest.raises(SettingsError):
            self.manager.from_dict({"max_array_items": 0})
        assert self.manager.validate_settings({"count": 0}) is False
        assert self.manager.validate_settings({"count": 2}) is True

    def test_override(self):
        settings = self.manager.override(seed=3, anonymize=None)

        assert settings.seed == 3
        assert settings.anonymize is False
