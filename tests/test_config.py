"""Tests for configuration loading."""

from pathlib import Path

import pytest

from ticklist.config import DATA_FILE, Config, load_config


@pytest.fixture
def conf(tmp_path):
    def write(text: str) -> Path:
        path = tmp_path / "ticklist.conf"
        path.write_text(text)
        return path

    return write


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.conf")
        assert config == Config()
        assert config.data_file == DATA_FILE

    def test_reads_values(self, conf):
        config = load_config(
            conf(
                "# comment\n"
                "data_file = ~/todos/list.json\n"
                "THEME=cyberpunk\n"
                "due_soon_hours = 48\n"
                "poll_interval_ms = 250\n"
                "show_details = yes\n"
            )
        )
        assert config.data_file == Path.home() / "todos" / "list.json"
        assert config.theme == "cyberpunk"
        assert config.due_soon_hours == 48
        assert config.poll_interval_ms == 250
        assert config.show_details is True

    def test_quoted_value_with_comment(self, conf):
        config = load_config(conf('theme = "soft_pastel" # easier on the eyes\n'))
        assert config.theme == "soft_pastel"

    def test_unquoted_inline_comment(self, conf):
        config = load_config(conf("due_soon_hours = 12 # half a day\n"))
        assert config.due_soon_hours == 12

    def test_invalid_values_keep_defaults(self, conf, caplog):
        config = load_config(
            conf("theme = neon\ndue_soon_hours = soon\npoll_interval_ms = -5\nshow_details = maybe\n")
        )
        assert config == Config()
        assert "Unknown THEME" in caplog.text
        assert "not an integer" in caplog.text
        assert "must be positive" in caplog.text
        assert "not a boolean" in caplog.text

    def test_ignores_lines_without_equals(self, conf):
        config = load_config(conf("garbage line\ntheme=cyberpunk\n"))
        assert config.theme == "cyberpunk"
