"""Tests for the command-line entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from conftest import FakeTagEditor, make_audio_file
from music_classifier.main import build_parser, main
from music_classifier.utils.constants import APP_NAME, APP_VERSION
from music_classifier.utils.logger import shutdown_logger


@pytest.fixture(autouse=True)
def reset_app_logger():
    yield
    shutdown_logger()


@pytest.fixture(autouse=True)
def fake_tags(monkeypatch):
    monkeypatch.setattr("music_classifier.core.identity_resolver.TagEditor", FakeTagEditor)


def _write_config(directory: Path, music_root: Path, **overrides) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "genres.yaml").write_text(
        yaml.safe_dump([
            {"artist": "Foo", "genres": ["Techno"]},
            {"artist": "Bar", "genres": ["House", "Disco"]},
        ]),
        encoding="utf-8",
    )
    config = {
        "music_path_directory": str(music_root),
        "music_name_origin": "FILE_NAME",
        "save_music_per_artist": True,
        "save_music_per_genre": True,
        "print_artist_popularity": True,
        "print_error_logs": True,
        "genres_file": "genres.yaml",
    }
    config.update(overrides)
    path = directory / "config.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return path


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config == Path("config.yaml")
        assert args.log_level is None

    def test_overrides(self):
        args = build_parser().parse_args(["-c", "other.yaml", "--log-level", "DEBUG"])
        assert args.config == Path("other.yaml")
        assert args.log_level == "DEBUG"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert APP_VERSION in capsys.readouterr().out


class TestMain:
    def test_full_run_prints_report(self, tmp_path, music_root, capsys):
        make_audio_file(music_root, "Foo - Track1.mp3")
        make_audio_file(music_root, "Bar, Foo - Track2.mp3")
        config_path = _write_config(tmp_path / "conf", music_root)

        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config_path), "--log-level", "WARNING"])

        assert exc.value.code == 0
        assert capsys.readouterr().out.splitlines() == ["Foo: 2", "Bar: 1"]
        assert (music_root / "Foo, Bar - Track2.mp3").exists()
        assert (music_root / "Artists" / "Bar" / "Foo, Bar - Track2.mp3").exists()
        assert (music_root / "Genre" / "Disco" / "Foo, Bar - Track2.mp3").exists()

    def test_report_can_be_disabled(self, tmp_path, music_root, capsys):
        make_audio_file(music_root, "Foo - Track1.mp3")
        config_path = _write_config(tmp_path / "conf", music_root, print_artist_popularity=False)

        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config_path)])

        assert exc.value.code == 0
        assert capsys.readouterr().out == ""

    def test_logs_go_to_stderr(self, tmp_path, music_root, capsys):
        make_audio_file(music_root, "no separator.mp3")
        make_audio_file(music_root, "Foo - Track1.mp3")
        config_path = _write_config(tmp_path / "conf", music_root)

        with pytest.raises(SystemExit):
            main(["--config", str(config_path)])

        captured = capsys.readouterr()
        assert "Invalid file name" in captured.err
        assert "Invalid file name" not in captured.out

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(tmp_path / "missing.yaml")])
        assert exc.value.code.startswith("music-classifier: config file not found")

    def test_invalid_origin(self, tmp_path, music_root):
        config_path = _write_config(tmp_path / "conf", music_root, music_name_origin="TAGS")
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config_path)])
        assert "invalid music name origin" in exc.value.code

    def test_missing_genre_table(self, tmp_path, music_root):
        make_audio_file(music_root, "Foo - Track1.mp3")
        config_path = _write_config(tmp_path / "conf", music_root, genres_file="nope.yaml")
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config_path)])
        assert "genre table not found" in exc.value.code

    def test_empty_collection(self, tmp_path, music_root):
        config_path = _write_config(tmp_path / "conf", music_root)
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config_path)])
        assert "no files with extensions .mp3" in exc.value.code

    def test_no_music_data(self, tmp_path, music_root):
        make_audio_file(music_root, "untitled.mp3")
        config_path = _write_config(tmp_path / "conf", music_root)
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config_path)])
        assert exc.value.code == "music-classifier: no music data found"

    def test_non_string_log_level(self, tmp_path, music_root):
        config_path = _write_config(tmp_path / "conf", music_root, log_level=5)
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config_path)])
        assert exc.value.code == "music-classifier: log_level must be a string, got 5"

    def test_log_file_is_complete_after_abort(self, tmp_path, music_root):
        make_audio_file(music_root, "untitled.mp3")
        log_file = tmp_path / "logs" / "run.log"
        config_path = _write_config(tmp_path / "conf", music_root, log_file=str(log_file))

        with pytest.raises(SystemExit):
            main(["--config", str(config_path)])

        text = log_file.read_text(encoding="utf-8")
        assert f"{APP_NAME} v{APP_VERSION} starting" in text
        assert "Aborted: no music data found" in text
        assert logging.getLogger(APP_NAME).handlers == []
