"""Tests for configuration management."""

import json

import pytest

from quick_open.models.exceptions import ConfigError, ConfigValidationError, QuickOpenError
from quick_open.services.config import ConfigManager, FinderSettings


class TestFinderSettings:
    """Tests for FinderSettings."""

    def test_defaults(self):
        settings = FinderSettings()
        assert settings.max_depth == 8
        assert settings.debounce_ms == 50
        assert settings.debounce_seconds == pytest.approx(0.05)
        assert settings.name_result_limit == 100
        assert settings.content_result_limit == 200
        settings.validate()

    def test_from_dict_fills_missing_keys(self):
        settings = FinderSettings.from_dict({"max_depth": 3})
        assert settings.max_depth == 3
        assert settings.name_result_limit == 100

    def test_to_dict_omits_empty_lists(self):
        data = FinderSettings().to_dict()
        assert "extra_exclude_dirs" not in data
        assert "extra_extensions" not in data

    def test_round_trip_with_extras(self):
        settings = FinderSettings(extra_exclude_dirs=["out"], extra_extensions=["org"])
        assert FinderSettings.from_dict(settings.to_dict()) == settings

    @pytest.mark.parametrize("changes", [
        {"max_depth": 0},
        {"debounce_ms": -1},
        {"name_result_limit": 0},
        {"content_result_limit": 0},
        {"content_preview_chars": 0},
    ])
    def test_validate_rejects(self, changes):
        with pytest.raises(ConfigValidationError):
            FinderSettings(**changes).validate()

    def test_validation_error_hierarchy(self):
        with pytest.raises(ConfigError) as exc_info:
            FinderSettings(max_depth=0).validate()
        assert isinstance(exc_info.value, QuickOpenError)
        assert exc_info.value.suggestion
        assert exc_info.value.suggestion in str(exc_info.value)


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_missing_file_gives_defaults(self, config_manager):
        assert config_manager.settings == FinderSettings()

    def test_save_and_reload(self, config_manager):
        config_manager.save_settings(FinderSettings(max_depth=4, debounce_ms=10))
        reloaded = ConfigManager(config_dir=config_manager.config_file.parent)
        assert reloaded.settings.max_depth == 4
        assert reloaded.settings.debounce_ms == 10

    def test_save_validates(self, config_manager):
        with pytest.raises(ConfigValidationError):
            config_manager.save_settings(FinderSettings(max_depth=0))
        assert not config_manager.config_file.exists()

    def test_update(self, config_manager):
        settings = config_manager.update(name_result_limit=50)
        assert settings.name_result_limit == 50
        data = json.loads(config_manager.config_file.read_text())
        assert data["name_result_limit"] == 50

    def test_corrupt_file_falls_back(self, config_manager):
        config_manager.config_file.write_text("{not json")
        assert config_manager.settings == FinderSettings()

    def test_invalid_values_fall_back(self, config_manager):
        config_manager.config_file.write_text(json.dumps({"max_depth": 0}))
        assert config_manager.settings == FinderSettings()

    def test_creates_missing_directory(self, tmp_path):
        manager = ConfigManager(config_dir=tmp_path / "nested" / "dir")
        manager.save_settings(FinderSettings())
        assert manager.config_file.exists()
