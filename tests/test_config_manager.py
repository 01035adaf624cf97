"""
Tests for config_manager against temporary settings files.
"""

import json
from pathlib import Path

import pytest

from Calculator import config_manager


PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.mark.unit
class TestLoadSettings:
    def test_missing_file_gives_defaults(self, config_paths):
        assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS
        assert config_manager.load_setting_value("history_limit") == 10

    def test_partial_file_is_merged_over_defaults(self, config_paths):
        config_file, _ = config_paths
        config_file.write_text(json.dumps({"darkmode": True}), encoding="utf-8")

        settings = config_manager.load_setting_value("all")
        assert settings["darkmode"] is True
        assert settings["history_limit"] == 10

    def test_corrupt_file_gives_defaults(self, config_paths):
        config_file, _ = config_paths
        config_file.write_text("{not json", encoding="utf-8")
        assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS

    def test_non_object_file_gives_defaults(self, config_paths):
        config_file, _ = config_paths
        config_file.write_text("[1, 2]", encoding="utf-8")
        assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS

    def test_unknown_key(self, config_paths):
        assert config_manager.load_setting_value("no_such_setting") == 0

    def test_defaults_are_not_shared(self, config_paths):
        settings = config_manager.load_setting_value("all")
        settings["darkmode"] = True
        assert config_manager.DEFAULT_SETTINGS["darkmode"] is False


@pytest.mark.unit
class TestDescriptions:
    def test_default_descriptions(self, config_paths):
        assert config_manager.load_setting_description("darkmode") == "Dark mode"
        assert config_manager.load_setting_description("no_such_setting") == ""

    def test_descriptions_from_file(self, config_paths):
        _, strings_file = config_paths
        strings_file.write_text(json.dumps({"darkmode": "Night"}), encoding="utf-8")
        assert config_manager.load_setting_description("darkmode") == "Night"


@pytest.mark.unit
class TestSaveSettings:
    def test_round_trip(self, config_paths):
        settings = config_manager.load_setting_value("all")
        settings["history_limit"] = 4
        assert config_manager.save_setting(settings) == settings
        assert config_manager.load_setting_value("history_limit") == 4

    def test_unwritable_location(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config_manager, "config_json", tmp_path / "missing" / "config.json")
        assert config_manager.save_setting({"darkmode": True}) == {}


@pytest.mark.unit
class TestShippedFiles:
    def test_config_and_strings_cover_the_same_keys(self):
        with open(PROJECT_ROOT / "config.json", encoding="utf-8") as f:
            settings = json.load(f)
        with open(PROJECT_ROOT / "ui_strings.json", encoding="utf-8") as f:
            descriptions = json.load(f)
        assert set(settings) == set(descriptions) == set(config_manager.DEFAULT_SETTINGS)
