from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "db_path": "words.db",
    "storage_key": "english_words",
    "export_prefix": "english-words-backup",
    "export_dir": "exports",
    "min_quiz_words": 4,
    "history_limit": 20,
}


@dataclass
class Settings:
    db_path: str = DEFAULTS["db_path"]
    storage_key: str = DEFAULTS["storage_key"]
    export_prefix: str = DEFAULTS["export_prefix"]
    export_dir: str = DEFAULTS["export_dir"]
    min_quiz_words: int = DEFAULTS["min_quiz_words"]
    history_limit: int = DEFAULTS["history_limit"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def db_full_path(self) -> Path:
        return self.project_root / self.db_path

    @property
    def export_full_path(self) -> Path:
        return self.project_root / self.export_dir

    def to_dict(self) -> dict:
        return {
            "db_path": self.db_path,
            "storage_key": self.storage_key,
            "export_prefix": self.export_prefix,
            "export_dir": self.export_dir,
            "min_quiz_words": self.min_quiz_words,
            "history_limit": self.history_limit,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        # Quiz sizes below four cannot produce a full option set
        if raw.get("min_quiz_words", DEFAULTS["min_quiz_words"]) < DEFAULTS["min_quiz_words"]:
            raw["min_quiz_words"] = DEFAULTS["min_quiz_words"]
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
