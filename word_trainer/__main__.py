"""CLI entry point for word-trainer.

Usage:
  python -m word_trainer serve [--port PORT] [--host HOST]
  python -m word_trainer list [QUERY]
  python -m word_trainer add TERM DEFINITION
  python -m word_trainer delete ID
  python -m word_trainer import FILE
  python -m word_trainer export [--dir DIR]
  python -m word_trainer quiz
  python -m word_trainer stats
"""
from __future__ import annotations

import sys
from pathlib import Path

LETTERS = "ABCD"


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "list":
        _list(args[1:])
    elif command == "add":
        _add(args[1:])
    elif command == "delete":
        _delete(args[1:])
    elif command == "import":
        _import(args[1:])
    elif command == "export":
        _export(args[1:])
    elif command == "quiz":
        _quiz()
    elif command == "stats":
        _stats()
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, list, add, delete, import, export, quiz, stats")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _serve(args: list[str]):
    import uvicorn

    port = int(_parse_flag(args, "--port", "8766"))
    host = _parse_flag(args, "--host", "127.0.0.1")

    print(f"Starting Word Trainer on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    uvicorn.run(
        "word_trainer.app:app",
        host=host,
        port=port,
        reload=False,
        timeout_graceful_shutdown=5,
    )


def _open_store():
    from word_trainer.config import load_settings
    from word_trainer.db import Database
    from word_trainer.store import WordStore

    settings = load_settings()
    db = Database(settings.db_full_path)
    return settings, db, WordStore(db, settings.storage_key)


def _list(args: list[str]):
    from word_trainer.words import search_words

    _, db, store = _open_store()
    query = " ".join(args)
    words = search_words(store, query)
    if not words:
        print("No words found." if query.strip() else "Your word list is empty.")
    for w in words:
        print(f"  {w.term:24s} {w.definition}  [{w.id}]")
    db.close()


def _add(args: list[str]):
    from word_trainer.words import add_word

    if len(args) < 2:
        print("Usage: add TERM DEFINITION")
        sys.exit(1)
    _, db, store = _open_store()
    result = add_word(store, args[0], " ".join(args[1:]))
    print(result.message)
    db.close()
    if not result.success:
        sys.exit(1)


def _delete(args: list[str]):
    from word_trainer.words import delete_word

    if not args:
        print("Usage: delete ID")
        sys.exit(1)
    _, db, store = _open_store()
    if delete_word(store, args[0]):
        print(f"Deleted {args[0]}.")
    else:
        print(f"No word with id {args[0]}.")
    db.close()


def _import(args: list[str]):
    from word_trainer.transfer import import_file

    if not args:
        print("Usage: import FILE")
        sys.exit(1)
    _, db, store = _open_store()
    result = import_file(store, Path(args[0]))
    print(result.message)
    db.close()
    if not result.success:
        sys.exit(1)


def _export(args: list[str]):
    from word_trainer.transfer import NOTHING_TO_EXPORT, write_export

    settings, db, store = _open_store()
    directory = Path(_parse_flag(args, "--dir", str(settings.export_full_path)))
    out = write_export(store, directory, prefix=settings.export_prefix)
    db.close()
    if out is None:
        print(NOTHING_TO_EXPORT)
        sys.exit(1)
    print(f"Exported to {out}")


def _quiz():
    from word_trainer.models import AnswerResult
    from word_trainer.quiz import QuizSession, SessionState

    settings, db, store = _open_store()
    session = QuizSession(min_words=settings.min_quiz_words)
    session_id = None
    if session.start(store.load()) == SessionState.AWAITING_ANSWER:
        session_id = db.start_session(store.key)

    try:
        while session.state == SessionState.AWAITING_ANSWER:
            q = session.question
            print(f"\nQuestion {session.questions_answered + 1}  "
                  f"({session.correct_count} correct)")
            print(f"What is the meaning of: {q.term.upper()}")
            for letter, option in zip(LETTERS, q.options):
                print(f"  {letter}. {option}")

            choice = input("Answer (A-D, q to quit): ").strip().upper()
            if choice == "Q":
                break
            if len(choice) != 1 or choice not in LETTERS:
                print("Please enter A, B, C or D.")
                continue

            result = session.answer(q.options[LETTERS.index(choice)])
            if result is AnswerResult.CORRECT:
                print("Correct!")
            else:
                print(f"Incorrect. The correct answer is: {q.correct_definition}")
            session.next_question(store.load())
    except (EOFError, KeyboardInterrupt):
        print()

    if session.state in (SessionState.INSUFFICIENT_DATA,
                         SessionState.INSUFFICIENT_DISTINCT_OPTIONS):
        print(session.message)

    if session_id is not None:
        db.end_session(session_id, session.questions_answered, session.correct_count)
    print(f"\nScore: {session.correct_count}/{session.questions_answered} "
          f"({session.accuracy}%)")
    db.close()


def _stats():
    _, db, store = _open_store()
    stats = db.get_stats()
    words = store.load()

    print("Word Trainer Stats")
    print("=" * 40)
    print(f"Total words:        {len(words)}")
    print(f"Sessions completed: {stats['total_sessions']}")
    print(f"Questions answered: {stats['total_questions_answered']}")
    print(f"Overall accuracy:   {stats['accuracy']}%")
    db.close()


if __name__ == "__main__":
    main()
