"""Shared test fixtures."""
from __future__ import annotations

import pytest

from word_trainer.db import Database
from word_trainer.models import WordEntry
from word_trainer.store import WordStore


@pytest.fixture
def tmp_db(tmp_path):
    """Create a fresh temporary database."""
    db = Database(tmp_path / "test.db")
    yield db
    db.close()


@pytest.fixture
def store(tmp_db):
    """An empty word list."""
    return WordStore(tmp_db, "test_words")


@pytest.fixture
def sample_entries():
    """Five entries with distinct terms and definitions."""
    return [
        WordEntry("w1", "Cat", "A feline", 100),
        WordEntry("w2", "Dog", "A canine", 200),
        WordEntry("w3", "ephemeral", "lasting a very short time", 300),
        WordEntry("w4", "ubiquitous", "present everywhere", 400),
        WordEntry("w5", "laconic", "using very few words", 500),
    ]


@pytest.fixture
def populated_store(store, sample_entries):
    """A word list pre-loaded with the sample entries."""
    store.save(sample_entries)
    return store
