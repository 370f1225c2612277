"""Add, search and delete entries of a stored vocabulary list."""
from __future__ import annotations

import logging
import time
import uuid
from typing import TYPE_CHECKING

from word_trainer.models import ErrorKind, SaveResult, WordEntry

if TYPE_CHECKING:
    from word_trainer.store import WordStore

_log = logging.getLogger("word_trainer.words")


def get_words(store: WordStore) -> list[WordEntry]:
    return store.load()


def find_word_by_term(store: WordStore, term: str) -> WordEntry | None:
    key = term.lower()
    return next((w for w in store.load() if w.term.lower() == key), None)


def search_words(store: WordStore, query: str) -> list[WordEntry]:
    """Entries whose term or definition contains *query*, ignoring case.

    A blank query matches everything.
    """
    words = store.load()
    if not query.strip():
        return words
    needle = query.lower()
    return [
        w for w in words
        if needle in w.term.lower() or needle in w.definition.lower()
    ]


def _now_ms() -> int:
    return int(time.time() * 1000)


def add_word(
    store: WordStore,
    term: str,
    definition: str,
    now: int | None = None,
) -> SaveResult:
    term = term.strip()
    definition = definition.strip()
    if not term or not definition:
        return SaveResult(
            success=False,
            message="Both the word and its definition are required.",
            error=ErrorKind.EMPTY_FIELD,
        )

    if find_word_by_term(store, term) is not None:
        _log.info("Rejected duplicate term %r", term)
        return SaveResult(
            success=False,
            message=f'The word "{term}" already exists in your list.',
            error=ErrorKind.DUPLICATE_TERM,
        )

    entry = WordEntry(
        id=str(uuid.uuid4()),
        term=term,
        definition=definition,
        created_at=now if now is not None else _now_ms(),
    )
    words = store.load()
    words.append(entry)
    store.save(words)
    return SaveResult(success=True, message="Word saved successfully!", entry=entry)


def delete_word(store: WordStore, word_id: str) -> bool:
    """Remove the entry with *word_id*. Returns False if it was not stored."""
    words = store.load()
    remaining = [w for w in words if w.id != word_id]
    store.save(remaining)
    return len(remaining) < len(words)
