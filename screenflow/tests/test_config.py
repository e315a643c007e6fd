"""Tests for environment-driven settings."""

import dataclasses
import logging

from screenflow.config import FlowSettings, configure_logging, get_settings
from screenflow.store import FlowStore


class TestSettings:
    """Test reading SCREENFLOW_* variables."""

    def test_defaults(self, monkeypatch):
        for name in (
            "SCREENFLOW_LOG_LEVEL",
            "SCREENFLOW_EXPORT_INDENT",
            "SCREENFLOW_SNAP_GRID",
        ):
            monkeypatch.delenv(name, raising=False)

        assert get_settings() == FlowSettings()

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SCREENFLOW_LOG_LEVEL", "debug")
        monkeypatch.setenv("SCREENFLOW_EXPORT_INDENT", "4")
        monkeypatch.setenv("SCREENFLOW_SNAP_GRID", "40")

        settings = get_settings()

        assert settings.log_level == "DEBUG"
        assert settings.export_indent == 4
        assert settings.snap_grid == 40

    def test_invalid_integer_falls_back(self, monkeypatch):
        monkeypatch.setenv("SCREENFLOW_SNAP_GRID", "wide")
        assert get_settings().snap_grid == 0

    def test_dotenv_read_when_settings_are_built(self, monkeypatch, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("SCREENFLOW_SNAP_GRID=25\nSCREENFLOW_EXPORT_INDENT=8\n")
        # set then delete so monkeypatch restores the unset state afterwards
        for name in ("SCREENFLOW_SNAP_GRID", "SCREENFLOW_EXPORT_INDENT"):
            monkeypatch.setenv(name, "0")
            monkeypatch.delenv(name)
        monkeypatch.setenv("SCREENFLOW_EXPORT_INDENT", "3")

        settings = get_settings(dotenv_path=env_file)

        assert settings.snap_grid == 25
        assert settings.export_indent == 3  # the environment wins over .env

    def test_environment_never_attaches_a_change_log(self, monkeypatch, tmp_path):
        log_path = tmp_path / "changes.jsonl"
        monkeypatch.setenv("SCREENFLOW_CHANGE_LOG", str(log_path))

        store = FlowStore()
        store.add_screen("login-screen", {"x": 0, "y": 0})

        assert not log_path.exists()
        assert "change_log_path" not in {field.name for field in dataclasses.fields(store.settings)}

    def test_configure_logging_accepts_unknown_level(self):
        configure_logging(FlowSettings(log_level="VERBOSE"))
        configure_logging(FlowSettings(log_level="DEBUG"))
        assert isinstance(logging.getLogger("screenflow").getEffectiveLevel(), int)
