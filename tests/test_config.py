"""Tests for configuration loading and saving."""
from __future__ import annotations

import json
from unittest.mock import patch

from word_trainer.config import DEFAULTS, Settings, load_settings, save_settings


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.db_path == "words.db"
        assert s.storage_key == "english_words"
        assert s.min_quiz_words == 4

    def test_to_dict(self):
        d = Settings().to_dict()
        assert d["export_prefix"] == "english-words-backup"
        assert len(d) == len(DEFAULTS)  # all fields present

    def test_to_dict_roundtrip(self):
        s = Settings(storage_key="french_words", history_limit=5)
        s2 = Settings(**s.to_dict())
        assert s2.storage_key == "french_words"
        assert s2.history_limit == 5

    def test_paths_resolve_against_project_root(self):
        s = Settings(db_path="data/w.db", export_dir="out")
        assert s.db_full_path == s.project_root / "data" / "w.db"
        assert s.export_full_path == s.project_root / "out"


class TestLoadSaveSettings:
    def test_load_from_file(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"storage_key": "spanish", "history_limit": 3}))

        with patch("word_trainer.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.storage_key == "spanish"
        assert s.history_limit == 3
        # Defaults for unspecified fields
        assert s.db_path == "words.db"

    def test_load_missing_file(self, tmp_path):
        with patch("word_trainer.config.CONFIG_PATH", tmp_path / "nonexistent.json"):
            s = load_settings()
        assert s.storage_key == "english_words"

    def test_min_quiz_words_never_below_four(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"min_quiz_words": 2}))
        with patch("word_trainer.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.min_quiz_words == 4

    def test_save_creates_file(self, tmp_path):
        config_path = tmp_path / "config.json"
        with patch("word_trainer.config.CONFIG_PATH", config_path):
            save_settings(Settings(export_dir="backups"))

        data = json.loads(config_path.read_text())
        assert data["export_dir"] == "backups"

    def test_unknown_keys_ignored(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"db_path": "x.db", "unknown_key": "value"}))

        with patch("word_trainer.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.db_path == "x.db"
        assert not hasattr(s, "unknown_key")
