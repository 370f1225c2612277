"""Import and export of vocabulary lists as JSON files."""
from __future__ import annotations

import json
import logging
import math
from datetime import date, datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from word_trainer.models import ErrorKind, ExportPayload, ImportResult, WordEntry

if TYPE_CHECKING:
    from word_trainer.store import WordStore

_log = logging.getLogger("word_trainer.transfer")

EXPORT_PREFIX = "english-words-backup"
NOTHING_TO_EXPORT = "No words to export!"

_STRING_FIELDS = ("id", "term", "definition")


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def _is_number(value: object) -> bool:
    # bool is an int subclass but not a timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not isinstance(value, float) or math.isfinite(value)


def _valid_entry(item: object) -> bool:
    if not isinstance(item, dict):
        return False
    if not all(isinstance(item.get(k), str) for k in _STRING_FIELDS):
        return False
    return _is_number(item.get("createdAt"))


def _import_message(admitted: int, skipped: int) -> str:
    msg = f"Successfully imported {admitted} new words."
    if skipped:
        msg += f" ({skipped} duplicates were skipped.)"
    return msg


def merge_import(existing: list[WordEntry], raw_payload: str) -> ImportResult:
    """Merge a serialized word list into *existing* without mutating it.

    An imported entry is admitted only when neither its id nor its
    lower-cased term is already known. Admitted entries join the known
    sets as the batch is walked, so the first of two duplicates within
    the payload wins.
    """
    try:
        data = json.loads(raw_payload, parse_constant=_reject_constant)
    except (ValueError, RecursionError, TypeError) as e:
        _log.warning("Import payload is not valid JSON: %s", e)
        return ImportResult(
            success=False,
            message="Error parsing the file. Please ensure it's a valid JSON file.",
            error=ErrorKind.PARSE_ERROR,
            merged=list(existing),
        )

    if not isinstance(data, list):
        _log.warning("Import payload is a %s, expected a list", type(data).__name__)
        return ImportResult(
            success=False,
            message="Invalid file format. Expected an array of words.",
            error=ErrorKind.INVALID_SHAPE,
            merged=list(existing),
        )

    if not all(_valid_entry(item) for item in data):
        _log.warning("Import payload has entries with missing or mistyped fields")
        return ImportResult(
            success=False,
            message="Invalid word data in the file.",
            error=ErrorKind.INVALID_SHAPE,
            merged=list(existing),
        )

    known_ids = {w.id for w in existing}
    known_terms = {w.term.lower() for w in existing}
    admitted: list[WordEntry] = []
    for item in data:
        entry = WordEntry.from_dict(item)
        term_key = entry.term.lower()
        if entry.id in known_ids or term_key in known_terms:
            continue
        known_ids.add(entry.id)
        known_terms.add(term_key)
        admitted.append(entry)

    skipped = len(data) - len(admitted)
    return ImportResult(
        success=True,
        message=_import_message(len(admitted), skipped),
        merged=list(existing) + admitted,
        admitted_count=len(admitted),
        skipped_count=skipped,
    )


def import_words(store: WordStore, raw_payload: str) -> ImportResult:
    """Merge *raw_payload* into the stored list and write the result back."""
    result = merge_import(store.load(), raw_payload)
    if result.success:
        store.save(result.merged)
        _log.info(
            "Imported %d words into %r (%d skipped)",
            result.admitted_count, store.key, result.skipped_count,
        )
    return result


def import_file(store: WordStore, path: Path) -> ImportResult:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _log.warning("Could not read %s: %s", path, e)
        return ImportResult(
            success=False,
            message="Error reading the file.",
            error=ErrorKind.FILE_READ_ERROR,
            merged=store.load(),
        )
    return import_words(store, raw)


# ── Export ────────────────────────────────────────────────────────────────

def export_filename(today: date | None = None, prefix: str = EXPORT_PREFIX) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"{prefix}-{today.isoformat()}.json"


def export_payload(
    words: list[WordEntry],
    today: date | None = None,
    prefix: str = EXPORT_PREFIX,
) -> ExportPayload:
    content = json.dumps([w.to_dict() for w in words], indent=2, ensure_ascii=False)
    return ExportPayload(filename=export_filename(today, prefix), content=content)


def export_words(
    store: WordStore,
    today: date | None = None,
    prefix: str = EXPORT_PREFIX,
) -> ExportPayload | None:
    """Payload for the stored list, or None when there is nothing to export."""
    words = store.load()
    if not words:
        return None
    return export_payload(words, today, prefix)


def write_export(
    store: WordStore,
    directory: Path,
    today: date | None = None,
    prefix: str = EXPORT_PREFIX,
) -> Path | None:
    payload = export_words(store, today, prefix)
    if payload is None:
        return None
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    out = directory / payload.filename
    out.write_text(payload.content + "\n", encoding="utf-8")
    _log.info("Exported %r to %s", store.key, out)
    return out
