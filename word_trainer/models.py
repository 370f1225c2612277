from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    DUPLICATE_TERM = "duplicate_term"
    EMPTY_FIELD = "empty_field"
    EMPTY_LIST = "empty_list"
    PARSE_ERROR = "parse_error"
    INVALID_SHAPE = "invalid_shape"
    FILE_READ_ERROR = "file_read_error"
    INSUFFICIENT_DATA = "insufficient_data"
    INSUFFICIENT_DISTINCT_OPTIONS = "insufficient_distinct_options"


class AnswerResult(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass
class WordEntry:
    id: str
    term: str
    definition: str
    created_at: int | float  # epoch milliseconds

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "term": self.term,
            "definition": self.definition,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> WordEntry:
        return cls(
            id=data["id"],
            term=data["term"],
            definition=data["definition"],
            created_at=data["createdAt"],
        )


@dataclass(frozen=True)
class Question:
    term: str
    correct_definition: str
    options: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "term": self.term,
            "correct_definition": self.correct_definition,
            "options": list(self.options),
        }


@dataclass
class SaveResult:
    success: bool
    message: str
    error: ErrorKind | None = None
    entry: WordEntry | None = None


@dataclass
class ImportResult:
    success: bool
    message: str
    error: ErrorKind | None = None
    merged: list[WordEntry] = field(default_factory=list)
    admitted_count: int = 0
    skipped_count: int = 0


@dataclass
class ExportPayload:
    filename: str
    content: str
