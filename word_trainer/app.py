"""FastAPI application with all routes."""
from __future__ import annotations

import logging

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response

from word_trainer.config import Settings, load_settings, save_settings
from word_trainer.db import Database
from word_trainer.models import ErrorKind
from word_trainer.quiz import QuizSession, SessionState
from word_trainer.store import WordStore
from word_trainer.transfer import NOTHING_TO_EXPORT, export_words, import_words
from word_trainer.words import add_word, delete_word, search_words

app = FastAPI(title="Word Trainer")

_log = logging.getLogger("word_trainer.app")

# Global state (initialized in startup)
_db: Database | None = None
_settings: Settings | None = None
_active_sessions: dict[int, QuizSession] = {}  # session_id -> quiz session


def get_db() -> Database:
    assert _db is not None
    return _db


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def get_store() -> WordStore:
    return WordStore(get_db(), get_settings().storage_key)


@app.on_event("startup")
async def startup():
    global _db, _settings
    if _db is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _db = Database(_settings.db_full_path)
    _log.info("Using %s (key %r)", _settings.db_full_path, _settings.storage_key)


@app.on_event("shutdown")
async def shutdown():
    if _db:
        _db.close()


async def _json_body(request: Request) -> dict:
    body = await request.json() if await request.body() else {}
    if not isinstance(body, dict):
        raise HTTPException(400, "Expected a JSON object")
    return body


# ── API: Words ────────────────────────────────────────────────────────────

@app.get("/api/words")
async def api_words(q: str = ""):
    return [w.to_dict() for w in search_words(get_store(), q)]


@app.post("/api/words")
async def api_add_word(request: Request):
    body = await _json_body(request)
    result = add_word(
        get_store(),
        str(body.get("term", "")),
        str(body.get("definition", "")),
    )
    return {
        "success": result.success,
        "message": result.message,
        "error": result.error.value if result.error else None,
        "word": result.entry.to_dict() if result.entry else None,
    }


@app.delete("/api/words/{word_id}")
async def api_delete_word(word_id: str):
    return {"id": word_id, "deleted": delete_word(get_store(), word_id)}


# ── API: Import / export ──────────────────────────────────────────────────

@app.get("/api/export")
async def api_export():
    s = get_settings()
    payload = export_words(get_store(), prefix=s.export_prefix)
    if payload is None:
        return {
            "success": False,
            "message": NOTHING_TO_EXPORT,
            "error": ErrorKind.EMPTY_LIST.value,
        }
    return Response(
        content=payload.content,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{payload.filename}"'},
    )


@app.post("/api/import")
async def api_import(request: Request):
    raw = await request.body()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return {
            "success": False,
            "message": "Error reading the file.",
            "error": ErrorKind.FILE_READ_ERROR.value,
        }
    result = import_words(get_store(), text)
    return {
        "success": result.success,
        "message": result.message,
        "error": result.error.value if result.error else None,
        "admitted": result.admitted_count,
        "skipped": result.skipped_count,
        "total_words": len(result.merged),
    }


# ── API: Quiz ─────────────────────────────────────────────────────────────

def _get_session(session_id) -> QuizSession:
    if session_id not in _active_sessions:
        raise HTTPException(404, "Session not found")
    return _active_sessions[session_id]


def _session_response(session_id: int | None, session: QuizSession) -> dict:
    data = session.to_dict()
    data["session_id"] = session_id
    return data


@app.post("/api/quiz/start")
async def api_quiz_start():
    s = get_settings()
    store = get_store()
    session = QuizSession(min_words=s.min_quiz_words)
    if session.start(store.load()) != SessionState.AWAITING_ANSWER:
        # Refused quizzes are not recorded; the client starts again later
        return _session_response(None, session)
    session_id = get_db().start_session(store.key)
    _active_sessions[session_id] = session
    return _session_response(session_id, session)


@app.get("/api/quiz/history")
async def api_quiz_history():
    s = get_settings()
    return {"sessions": get_db().get_session_history(limit=s.history_limit)}


@app.get("/api/quiz/{session_id}")
async def api_quiz_state(session_id: int):
    return _session_response(session_id, _get_session(session_id))


@app.post("/api/quiz/answer")
async def api_quiz_answer(request: Request):
    body = await _json_body(request)
    if "session_id" not in body or "option" not in body:
        raise HTTPException(400, "session_id and option are required")
    session_id = body["session_id"]
    session = _get_session(session_id)
    result = session.answer(str(body["option"]))
    data = _session_response(session_id, session)
    data["ignored"] = result is None
    return data


@app.post("/api/quiz/next")
async def api_quiz_next(request: Request):
    body = await _json_body(request)
    session_id = body.get("session_id")
    session = _get_session(session_id)
    session.next_question(get_store().load())
    return _session_response(session_id, session)


@app.post("/api/quiz/finish")
async def api_quiz_finish(request: Request):
    body = await _json_body(request)
    session_id = body.get("session_id")
    session = _get_session(session_id)
    get_db().end_session(session_id, session.questions_answered, session.correct_count)
    del _active_sessions[session_id]
    return {
        "session_id": session_id,
        "summary": {
            "total": session.questions_answered,
            "correct": session.correct_count,
            "accuracy": session.accuracy,
        },
    }


# ── API: Stats ────────────────────────────────────────────────────────────

@app.get("/api/stats")
async def api_stats():
    stats = get_db().get_stats()
    stats["total_words"] = len(get_store().load())
    stats["active_sessions"] = len(_active_sessions)
    return stats


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await _json_body(request)
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    for k, v in body.items():
        if k in known:
            setattr(s, k, v)
    save_settings(s)
    return s.to_dict()
