"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from periodfinder.config import AppConfig


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        """Test the defaults select the demo source."""
        config = AppConfig()

        assert config.source == "demo"
        assert config.refresh_seconds == 60
        assert config.use_demo_fallback
        assert config.color_for("Math") == "default"

    def test_load_json_source(self, tmp_path):
        """Test a relative data file is resolved next to the config file."""
        path = _write(tmp_path, (
            "timezone: Europe/Berlin\n"
            "source: json\n"
            "data_file: timetable.json\n"
            "subject_colors:\n"
            "  Math: blue\n"
        ))

        config = AppConfig.load_from_yaml(path)

        assert config.timezone == "Europe/Berlin"
        assert config.data_file == tmp_path / "timetable.json"
        assert config.color_for("Math") == "blue"

    def test_load_rest_source(self, tmp_path):
        """Test REST settings are parsed with table defaults."""
        path = _write(tmp_path, (
            "source: rest\n"
            "rest:\n"
            "  url: https://demo.supabase.co/\n"
            "  api_key: anon\n"
        ))

        config = AppConfig.load_from_yaml(path)

        assert config.rest.url == "https://demo.supabase.co"
        assert config.rest.slots_table == "timetable_slots"
        assert config.rest.breaks_table == "breaks"

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test broken YAML raises ValueError."""
        path = _write(tmp_path, "source: [demo\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_root_must_be_mapping(self, tmp_path):
        """Test a list at the root is rejected."""
        path = _write(tmp_path, "- demo\n")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(path)

    @pytest.mark.parametrize(
        "text",
        [
            "source: json\n",
            "source: rest\n",
            "source: ftp\n",
            "refresh_seconds: 0\n",
            "timezone: Mars/Olympus_Mons\n",
            "source: rest\nrest:\n  url: demo.supabase.co\n  api_key: x\n",
        ],
    )
    def test_invalid_settings(self, tmp_path, text):
        """Test invalid combinations raise ValueError."""
        path = _write(tmp_path, text)

        with pytest.raises(ValueError):
            AppConfig.load_from_yaml(path)
