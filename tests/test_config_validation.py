"""Tests for configuration loading and validation (AppConfig and main.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from music_classifier.main import load_config, validate_config
from music_classifier.models.config import AppConfig, MusicNameOrigin
from music_classifier.utils.exceptions import ConfigurationError


class TestAppConfigFromDict:
    def test_minimal_config_uses_defaults(self):
        config = AppConfig.from_dict({
            "music_path_directory": "/home/me/Music",
            "music_name_origin": "FILE_NAME",
        })
        assert config.music_name_origin is MusicNameOrigin.FILE_NAME
        assert config.save_music_per_artist is False
        assert config.save_music_per_genre is False
        assert config.audio_extensions == [".mp3"]
        assert config.truncate_malformed_titles is True
        assert config.title_mention_bonus is True

    def test_full_config(self):
        config = AppConfig.from_dict({
            "music_path_directory": "/home/me/Music",
            "music_name_origin": "METADATA",
            "save_music_per_artist": True,
            "save_music_per_genre": True,
            "print_artist_popularity": True,
            "print_error_logs": True,
            "audio_extensions": ["MP3", ".flac"],
        })
        assert config.music_name_origin is MusicNameOrigin.METADATA
        assert config.save_music_per_artist and config.save_music_per_genre
        assert config.audio_extensions == [".mp3", ".flac"]

    def test_unknown_keys_are_ignored(self):
        config = AppConfig.from_dict({
            "music_path_directory": "/home/me/Music",
            "music_name_origin": "FILE_NAME",
            "file_path_list": ["a.mp3"],
        })
        assert not hasattr(config, "file_path_list")

    def test_genres_file_resolved_against_base_dir(self, tmp_path):
        config = AppConfig.from_dict(
            {"music_path_directory": "/home/me/Music", "music_name_origin": "FILE_NAME"},
            base_dir=tmp_path,
        )
        assert Path(config.genres_file) == tmp_path / "genres.yaml"

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"music_name_origin": "FILE_NAME"}, "music_path_directory is empty"),
            ({"music_path_directory": "", "music_name_origin": "FILE_NAME"}, "empty"),
            ({"music_path_directory": "/m"}, "music_name_origin is required"),
            ({"music_path_directory": "/m", "music_name_origin": "TAGS"}, "invalid music name origin"),
            ({"music_path_directory": "/m", "music_name_origin": "file_name"}, "invalid music name origin"),
            (
                {"music_path_directory": "/m", "music_name_origin": "FILE_NAME", "save_music_per_artist": "yes"},
                "save_music_per_artist",
            ),
            (
                {"music_path_directory": "/m", "music_name_origin": "FILE_NAME", "audio_extensions": [".wav"]},
                "not supported",
            ),
            (
                {"music_path_directory": "/m", "music_name_origin": "FILE_NAME", "audio_extensions": []},
                "audio_extensions is empty",
            ),
            ({"music_path_directory": 42, "music_name_origin": "FILE_NAME"}, "music_path_directory must be a string"),
            ({"music_path_directory": "/m", "music_name_origin": "FILE_NAME", "log_level": 5}, "log_level must be a string"),
            ({"music_path_directory": "/m", "music_name_origin": "FILE_NAME", "log_level": "LOUD"}, "invalid log_level"),
            ({"music_path_directory": "/m", "music_name_origin": "FILE_NAME", "log_file": 3}, "log_file must be a string"),
            ({"music_path_directory": "/m", "music_name_origin": "FILE_NAME", "genres_file": ["a"]}, "genres_file must be a string"),
        ],
    )
    def test_invalid_config_raises(self, data, message):
        with pytest.raises(ConfigurationError, match=message):
            AppConfig.from_dict(data)

    def test_log_level_is_case_insensitive(self):
        config = AppConfig.from_dict(
            {"music_path_directory": "/m", "music_name_origin": "FILE_NAME", "log_level": "debug"}
        )
        assert config.log_level == "debug"

    def test_non_mapping_raises(self):
        with pytest.raises(ConfigurationError):
            AppConfig.from_dict(["not", "a", "mapping"])


class TestValidateConfig:
    def test_safe_path_produces_no_warnings(self, tmp_path):
        config = {"music_path_directory": str(tmp_path / "music")}
        assert validate_config(config) == []

    def test_system_directory_warns(self):
        warnings = validate_config({"music_path_directory": "/etc"})
        assert any("music_path_directory" in w for w in warnings)

    def test_filesystem_root_warns(self):
        warnings = validate_config({"music_path_directory": "/"})
        assert len(warnings) == 1

    def test_empty_config(self):
        """Missing fields are AppConfig's job, not a warning."""
        assert validate_config({}) == []


class TestLoadConfig:
    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("music_path_directory: /m\nmusic_name_origin: METADATA\n", encoding="utf-8")
        assert load_config(path) == {"music_path_directory": "/m", "music_name_origin": "METADATA"}

    def test_loads_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"music_path_directory": "/m", "print_error_logs": true}', encoding="utf-8")
        assert load_config(path) == {"music_path_directory": "/m", "print_error_logs": True}

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "config.yaml")

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_unparseable_file_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("music_path_directory: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="cannot parse"):
            load_config(path)
