"""
Data Models for Quiz Submissions
================================

This module defines the data structures used to represent a quiz export
throughout the conversion pipeline: the question catalog, the class roster,
the column layout of the export and the per-student answer records. All
models are implemented as dataclasses.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union


class QuestionType(Enum):
    ESSAY = "essay"
    FITB = "fill_in_the_blank"
    OTHER = "other"


CANVAS_QUESTION_TYPES = {
    "essay_question": QuestionType.ESSAY,
    "fill_in_multiple_blanks_question": QuestionType.FITB,
}


@dataclass(frozen=True)
class Question:
    id: str
    type: QuestionType
    name: str = ""
    prompt: str = ""
    points: float = 0.0
    position: int = 0
    canvas_type: str = ""

    @classmethod
    def from_canvas(cls, payload: Dict[str, Any]) -> "Question":
        """Builds a Question from a Canvas quiz question object."""
        canvas_type = payload.get("question_type") or ""
        return cls(
            id=str(payload["id"]),
            type=CANVAS_QUESTION_TYPES.get(canvas_type, QuestionType.OTHER),
            name=payload.get("question_name") or "",
            prompt=payload.get("question_text") or "",
            points=float(payload.get("points_possible") or 0.0),
            position=int(payload.get("position") or 0),
            canvas_type=canvas_type,
        )


@dataclass(frozen=True)
class RosterEntry:
    id: Union[int, str]
    login: str
    email: str = ""
    name: str = ""
    sis_id: str = ""

    @classmethod
    def from_canvas(cls, payload: Dict[str, Any]) -> "RosterEntry":
        return cls(
            id=payload["id"],
            login=payload.get("login_id") or "",
            email=payload.get("email") or "",
            name=payload.get("name") or "",
            sis_id=payload.get("sis_user_id") or "",
        )


@dataclass(frozen=True)
class ColumnMap:
    """
    Column layout of an export.

    The question block is the half-open range [start, stop); every question
    occupies two adjacent columns, the answer followed by its score marker.
    """
    id_col: int
    start: int
    stop: int
    attempt_col: int = -1

    @property
    def question_count(self) -> int:
        return (self.stop - self.start) // 2

    def answer_col(self, k: int) -> int:
        return self.start + 2 * k

    def marker_col(self, k: int) -> int:
        return self.start + 2 * k + 1


@dataclass(frozen=True)
class EssayResponse:
    type: ClassVar[QuestionType] = QuestionType.ESSAY
    question: Question
    response: Optional[str] = None

    @property
    def answered(self) -> bool:
        return self.response is not None


@dataclass(frozen=True)
class FITBResponse:
    type: ClassVar[QuestionType] = QuestionType.FITB
    question: Question
    response: Optional[List[str]] = None

    @property
    def answered(self) -> bool:
        return self.response is not None


@dataclass(frozen=True)
class OtherResponse:
    type: ClassVar[QuestionType] = QuestionType.OTHER
    question: Question
    response: Optional[Any] = None

    @property
    def answered(self) -> bool:
        return self.response is not None


QuizResponse = Union[EssayResponse, FITBResponse, OtherResponse]


@dataclass
class StudentRecord:
    id: str
    login: str
    email: str
    name: str
    sis_id: str
    responses: List[QuizResponse] = field(default_factory=list)
    attempt: int = 0


@dataclass
class ConversionResult:
    questions: List[Question]
    template: StudentRecord
    students: List[StudentRecord] = field(default_factory=list)

    @property
    def records(self) -> List[StudentRecord]:
        return [self.template, *self.students]
