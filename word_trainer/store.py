"""Whole-list persistence of vocabulary entries under a single storage key."""
from __future__ import annotations

import json
from typing import TYPE_CHECKING

from word_trainer.models import WordEntry

if TYPE_CHECKING:
    from word_trainer.db import Database

STORAGE_KEY = "english_words"


class WordStore:
    """Handle on one vocabulary list.

    The list is always read and written as a whole; callers do
    read-modify-write and never touch individual entries in storage.
    Two stores with different keys (or databases) are independent.
    """

    def __init__(self, db: Database, key: str = STORAGE_KEY):
        self.db = db
        self.key = key

    def load(self) -> list[WordEntry]:
        raw = self.db.get_value(self.key)
        if raw is None:
            return []
        return [WordEntry.from_dict(item) for item in json.loads(raw)]

    def save(self, words: list[WordEntry]) -> None:
        payload = json.dumps([w.to_dict() for w in words], ensure_ascii=False)
        self.db.set_value(self.key, payload)
