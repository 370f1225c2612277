"""Multiple-choice quiz questions drawn from a vocabulary list."""
from __future__ import annotations

import logging
import random
from enum import Enum

from word_trainer.models import AnswerResult, ErrorKind, Question, WordEntry

_log = logging.getLogger("word_trainer.quiz")

OPTION_COUNT = 4
MIN_QUIZ_WORDS = OPTION_COUNT

_rng = random.Random()


class QuizUnavailable(Exception):
    """The list cannot support a question right now."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def _distinct_definitions(words: list[WordEntry]) -> list[str]:
    """Definitions in first-seen order, exact duplicates dropped."""
    seen: set[str] = set()
    result: list[str] = []
    for w in words:
        if w.definition not in seen:
            seen.add(w.definition)
            result.append(w.definition)
    return result


def generate_question(
    words: list[WordEntry],
    previous: Question | None = None,
    rng: random.Random | None = None,
    min_words: int = MIN_QUIZ_WORDS,
) -> Question:
    """Pick a random entry and build four shuffled definition options.

    Incorrect options are sampled without replacement from the pool of
    distinct definitions, so a list full of repeated definitions fails
    with ``INSUFFICIENT_DISTINCT_OPTIONS`` instead of looping forever.

    *previous* is accepted so callers can pass the last question along
    for presentation; it does not influence selection.

    Raises :class:`QuizUnavailable` when no valid question can be built.
    """
    rng = rng or _rng
    min_words = max(min_words, MIN_QUIZ_WORDS)

    if len(words) < min_words:
        raise QuizUnavailable(
            ErrorKind.INSUFFICIENT_DATA,
            f"You need at least {min_words} words in your vocabulary list to start a quiz.",
        )

    pool = _distinct_definitions(words)
    if len(pool) < OPTION_COUNT:
        raise QuizUnavailable(
            ErrorKind.INSUFFICIENT_DISTINCT_OPTIONS,
            f"You need at least {OPTION_COUNT} different definitions to start a quiz.",
        )

    target = rng.choice(words)
    distractors = [d for d in pool if d != target.definition]
    options = [target.definition] + rng.sample(distractors, OPTION_COUNT - 1)
    rng.shuffle(options)

    return Question(
        term=target.term,
        correct_definition=target.definition,
        options=tuple(options),
    )


def submit_answer(question: Question, chosen: str) -> AnswerResult:
    if chosen == question.correct_definition:
        return AnswerResult.CORRECT
    return AnswerResult.INCORRECT


class SessionState(str, Enum):
    INSUFFICIENT_DATA = "insufficient_data"
    INSUFFICIENT_DISTINCT_OPTIONS = "insufficient_distinct_options"
    AWAITING_ANSWER = "awaiting_answer"
    ANSWERED = "answered"


_REFUSAL_STATES = {
    ErrorKind.INSUFFICIENT_DATA: SessionState.INSUFFICIENT_DATA,
    ErrorKind.INSUFFICIENT_DISTINCT_OPTIONS: SessionState.INSUFFICIENT_DISTINCT_OPTIONS,
}


class QuizSession:
    """Running score over an open-ended sequence of questions.

    Each question accepts exactly one answer; further answers are
    ignored until :meth:`next_question` moves on.
    """

    def __init__(self, rng: random.Random | None = None, min_words: int = MIN_QUIZ_WORDS):
        self.rng = rng or random.Random()
        self.min_words = min_words
        self.state: SessionState = SessionState.INSUFFICIENT_DATA
        self.question: Question | None = None
        self.message = ""
        self.selected: str | None = None
        self.result: AnswerResult | None = None
        self.questions_answered = 0
        self.correct_count = 0

    def start(self, words: list[WordEntry]) -> SessionState:
        self.questions_answered = 0
        self.correct_count = 0
        return self.next_question(words)

    def next_question(self, words: list[WordEntry]) -> SessionState:
        previous = self.question
        self.selected = None
        self.result = None
        try:
            self.question = generate_question(
                words, previous=previous, rng=self.rng, min_words=self.min_words
            )
        except QuizUnavailable as e:
            _log.info("Quiz unavailable (%s): %d words", e.kind.value, len(words))
            self.question = None
            self.state = _REFUSAL_STATES[e.kind]
            self.message = e.message
            return self.state
        self.state = SessionState.AWAITING_ANSWER
        self.message = ""
        return self.state

    def answer(self, option: str) -> AnswerResult | None:
        """Record an answer. Returns None when the answer is ignored."""
        if self.state != SessionState.AWAITING_ANSWER or self.question is None:
            return None
        self.selected = option
        self.result = submit_answer(self.question, option)
        self.questions_answered += 1
        if self.result is AnswerResult.CORRECT:
            self.correct_count += 1
        self.state = SessionState.ANSWERED
        return self.result

    @property
    def accuracy(self) -> float:
        if self.questions_answered == 0:
            return 0
        return round(self.correct_count / self.questions_answered * 100, 1)

    def to_dict(self) -> dict:
        question = None
        if self.question is not None:
            question = {
                "term": self.question.term,
                "options": list(self.question.options),
            }
            # Hide the answer until it has been given
            if self.state == SessionState.ANSWERED:
                question["correct_definition"] = self.question.correct_definition
        return {
            "state": self.state.value,
            "message": self.message,
            "question": question,
            "selected": self.selected,
            "result": self.result.value if self.result else None,
            "progress": {
                "number": self.questions_answered + (0 if self.state == SessionState.ANSWERED else 1),
                "answered": self.questions_answered,
                "correct": self.correct_count,
                "accuracy": self.accuracy,
            },
        }
