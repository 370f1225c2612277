"""Tests for the database layer and the word store on top of it."""
from __future__ import annotations

import json

from word_trainer.db import Database
from word_trainer.models import WordEntry
from word_trainer.store import STORAGE_KEY, WordStore


class TestKeyValue:
    def test_missing_key(self, tmp_db):
        assert tmp_db.get_value("nope") is None

    def test_set_and_get(self, tmp_db):
        tmp_db.set_value("k", "[1, 2]")
        assert tmp_db.get_value("k") == "[1, 2]"

    def test_set_replaces_whole_value(self, tmp_db):
        tmp_db.set_value("k", "first")
        tmp_db.set_value("k", "second")
        assert tmp_db.get_value("k") == "second"

    def test_persists_across_connections(self, tmp_path):
        db = Database(tmp_path / "p.db")
        db.set_value("k", "v")
        db.close()
        db2 = Database(tmp_path / "p.db")
        assert db2.get_value("k") == "v"
        db2.close()


class TestSessions:
    def test_start_and_end(self, tmp_db):
        sid = tmp_db.start_session("words")
        tmp_db.end_session(sid, total=5, correct=3)
        history = tmp_db.get_session_history()
        assert len(history) == 1
        assert history[0]["questions_total"] == 5
        assert history[0]["questions_correct"] == 3
        assert history[0]["storage_key"] == "words"
        assert history[0]["ended_at"] is not None

    def test_history_most_recent_first(self, tmp_db):
        first = tmp_db.start_session("a")
        second = tmp_db.start_session("a")
        ids = [h["id"] for h in tmp_db.get_session_history()]
        assert ids == [second, first]

    def test_history_limit(self, tmp_db):
        for _ in range(5):
            tmp_db.start_session("a")
        assert len(tmp_db.get_session_history(limit=2)) == 2

    def test_stats_empty(self, tmp_db):
        stats = tmp_db.get_stats()
        assert stats["total_sessions"] == 0
        assert stats["accuracy"] == 0

    def test_stats_ignore_open_sessions(self, tmp_db):
        done = tmp_db.start_session("a")
        tmp_db.end_session(done, total=4, correct=3)
        tmp_db.start_session("a")
        stats = tmp_db.get_stats()
        assert stats["total_sessions"] == 1
        assert stats["total_questions_answered"] == 4
        assert stats["accuracy"] == 75.0


class TestWordStore:
    def test_default_key(self, tmp_db):
        assert WordStore(tmp_db).key == STORAGE_KEY == "english_words"

    def test_empty_load(self, store):
        assert store.load() == []

    def test_save_and_load(self, store, sample_entries):
        store.save(sample_entries)
        assert store.load() == sample_entries

    def test_payload_is_list_of_objects(self, tmp_db, store):
        store.save([WordEntry("1", "Café", "A coffee shop", 100)])
        data = json.loads(tmp_db.get_value(store.key))
        assert data == [{"id": "1", "term": "Café", "definition": "A coffee shop", "createdAt": 100}]

    def test_keys_are_independent(self, tmp_db, sample_entries):
        a = WordStore(tmp_db, "a")
        b = WordStore(tmp_db, "b")
        a.save(sample_entries)
        assert b.load() == []
        assert len(a.load()) == 5
