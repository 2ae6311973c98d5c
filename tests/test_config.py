"""Tests for configuration reader module."""
import json
import pytest
from pathlib import Path

from freshness.models import Locale


class TestGetSettingsPath:
    """Tests for get_settings_path function."""

    def test_returns_default_path_when_no_env_var(self, monkeypatch):
        """Default path should be ~/.config/report-viewer/settings.json."""
        monkeypatch.delenv("REPORT_VIEWER_SETTINGS", raising=False)
        monkeypatch.delenv("REPORT_VIEWER_CONFIG", raising=False)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)

        from freshness.config import get_settings_path

        result = get_settings_path()
        assert isinstance(result, Path)
        assert result == Path.home() / ".config" / "report-viewer" / "settings.json"

    def test_respects_env_var_override(self, tmp_path, monkeypatch):
        """REPORT_VIEWER_SETTINGS env var overrides default path."""
        custom_path = tmp_path / "custom" / "settings.json"
        monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(custom_path))

        from freshness.config import get_settings_path

        assert get_settings_path() == custom_path


class TestGetSetting:
    """Tests for get_setting function."""

    def test_returns_default_when_file_missing(self, tmp_path, monkeypatch):
        monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(tmp_path / "nope" / "settings.json"))

        from freshness.config import get_setting

        assert get_setting("someKey", default="fallback") == "fallback"

    def test_returns_default_on_invalid_json(self, tmp_path, monkeypatch):
        settings_path = tmp_path / "settings.json"
        settings_path.write_text("{ not json")
        monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(settings_path))

        from freshness.config import get_setting

        assert get_setting("reportViewer.debugLevel", default=1) == 1

    def test_reads_nested_key_with_dot_notation(self, tmp_path, monkeypatch):
        settings_path = tmp_path / "settings.json"
        settings_path.write_text(json.dumps({
            "reportViewer": {
                "debugLevel": 2,
                "nested": {"deep": "value"},
            }
        }))
        monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(settings_path))

        from freshness.config import get_setting

        assert get_setting("reportViewer.debugLevel") == 2
        assert get_setting("reportViewer.nested.deep") == "value"

    def test_returns_default_for_partial_nested_path(self, tmp_path, monkeypatch):
        settings_path = tmp_path / "settings.json"
        settings_path.write_text(json.dumps({"reportViewer": "flat"}))
        monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(settings_path))

        from freshness.config import get_setting

        assert get_setting("reportViewer.debugLevel", default=9) == 9


class TestTypedSettings:
    """Tests for get_bool_setting, get_int_setting and get_float_setting."""

    @pytest.fixture
    def write_settings(self, tmp_path, monkeypatch):
        settings_path = tmp_path / "settings.json"
        monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(settings_path))

        def _write(data):
            settings_path.write_text(json.dumps({"reportViewer": data}))

        return _write

    @pytest.mark.parametrize("raw,expected", [
        (True, True), ("true", True), ("YES", True), ("1", True),
        (False, False), ("no", False), (0, False),
    ])
    def test_bool_conversion(self, write_settings, raw, expected):
        write_settings({"flag": raw})

        from freshness.config import get_bool_setting

        assert get_bool_setting("reportViewer.flag") is expected

    def test_int_conversion_and_fallback(self, write_settings):
        write_settings({"good": "30", "bad": "soon"})

        from freshness.config import get_int_setting

        assert get_int_setting("reportViewer.good", 60) == 30
        assert get_int_setting("reportViewer.bad", 60) == 60

    def test_float_conversion_and_fallback(self, write_settings):
        write_settings({"half": 0.5, "text": "2.5", "bad": "soon", "flag": True})

        from freshness.config import get_float_setting

        assert get_float_setting("reportViewer.half", 60.0) == 0.5
        assert get_float_setting("reportViewer.text", 60.0) == 2.5
        assert get_float_setting("reportViewer.bad", 60.0) == 60.0
        assert get_float_setting("reportViewer.flag", 60.0) == 60.0


class TestViewerSettings:
    """Tests for ViewerSettings.load."""

    def test_defaults_without_file(self):
        from freshness.config import ViewerSettings

        settings = ViewerSettings.load()
        assert settings.refresh_interval == 60.0
        assert settings.refresh_on_focus is False
        assert settings.reload_on_restore is False
        assert settings.default_locale is Locale.JA
        assert settings.demo_param == "demo"

    def test_reads_all_keys(self, tmp_path, monkeypatch):
        settings_path = tmp_path / "settings.json"
        settings_path.write_text(json.dumps({
            "reportViewer": {
                "refreshIntervalSeconds": 15,
                "refreshOnFocus": True,
                "reloadOnRestore": "true",
                "defaultLocale": "en",
                "demoParam": "sandbox",
            }
        }))
        monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(settings_path))

        from freshness.config import ViewerSettings

        settings = ViewerSettings.load()
        assert settings.refresh_interval == 15.0
        assert settings.refresh_on_focus is True
        assert settings.reload_on_restore is True
        assert settings.default_locale is Locale.EN
        assert settings.demo_param == "sandbox"

    def test_invalid_values_fall_back(self, tmp_path, monkeypatch):
        settings_path = tmp_path / "settings.json"
        settings_path.write_text(json.dumps({
            "reportViewer": {
                "refreshIntervalSeconds": -5,
                "defaultLocale": "fr",
                "demoParam": "",
            }
        }))
        monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(settings_path))

        from freshness.config import ViewerSettings

        settings = ViewerSettings.load()
        assert settings.refresh_interval == 60.0
        assert settings.default_locale is Locale.JA
        assert settings.demo_param == "demo"

    def test_fractional_interval_kept(self, tmp_path, monkeypatch):
        settings_path = tmp_path / "settings.json"
        settings_path.write_text(json.dumps({
            "reportViewer": {"refreshIntervalSeconds": 0.5}
        }))
        monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(settings_path))

        from freshness.config import ViewerSettings

        assert ViewerSettings.load().refresh_interval == 0.5

    @pytest.mark.parametrize("raw", ["nan", "soon", True, 0])
    def test_unusable_interval_falls_back(self, tmp_path, monkeypatch, raw):
        settings_path = tmp_path / "settings.json"
        settings_path.write_text(json.dumps({
            "reportViewer": {"refreshIntervalSeconds": raw}
        }))
        monkeypatch.setenv("REPORT_VIEWER_SETTINGS", str(settings_path))

        from freshness.config import ViewerSettings

        assert ViewerSettings.load().refresh_interval == 60.0
