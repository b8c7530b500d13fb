"""Tests for the optional user configuration file."""

from pathlib import Path

from mp3_cover_art.config.common import UserConfig, load_user_config


def test_missing_file_gives_defaults(tmp_path: Path):
    assert load_user_config(tmp_path / "config.user.yaml") == UserConfig()


def test_values_are_read(tmp_path: Path):
    config_path = tmp_path / "config.user.yaml"
    config_path.write_text(
        "paths:\n"
        "  ffmpeg_dir: /opt/ffmpeg/bin\n"
        "conversion:\n"
        "  timeout_seconds: 90\n",
        encoding="utf-8",
    )

    config = load_user_config(config_path)

    assert config.ffmpeg_dir == Path("/opt/ffmpeg/bin")
    assert config.timeout_seconds == 90.0


def test_empty_sections_are_tolerated(tmp_path: Path):
    config_path = tmp_path / "config.user.yaml"
    config_path.write_text("paths:\n  ffmpeg_dir:\nconversion:\n", encoding="utf-8")
    assert load_user_config(config_path) == UserConfig()


def test_non_positive_timeout_disables_limit(tmp_path: Path):
    config_path = tmp_path / "config.user.yaml"
    config_path.write_text("conversion:\n  timeout_seconds: 0\n", encoding="utf-8")
    assert load_user_config(config_path).timeout_seconds is None


def test_malformed_file_warns_and_gives_defaults(tmp_path: Path, app_logger, console):
    config_path = tmp_path / "config.user.yaml"
    config_path.write_text("paths: [unclosed\n", encoding="utf-8")

    assert load_user_config(config_path, log=app_logger) == UserConfig()
    assert "[WARN] Could not load or parse" in console.getvalue()


def test_non_mapping_file_warns_and_gives_defaults(tmp_path: Path, app_logger, console):
    config_path = tmp_path / "config.user.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    assert load_user_config(config_path, log=app_logger) == UserConfig()
    assert "top-level YAML value must be a mapping" in console.getvalue()


def test_defaults_to_current_directory(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.user.yaml").write_text("conversion:\n  timeout_seconds: 5\n", encoding="utf-8")
    assert load_user_config().timeout_seconds == 5.0
