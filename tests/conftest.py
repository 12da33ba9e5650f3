from __future__ import annotations

import csv
import io

import pytest

from models.quiz_models import Question, QuestionType, RosterEntry

EXPORT_HEADER = [
    "name", "id", "sis_id", "section", "section_id", "section_sis_id",
    "submitted", "attempt",
    "101: Describe your approach", "1.0",
    "102: Fill in the blanks", "1.0",
    "103: Pick one", "1.0",
    "n correct", "n incorrect", "score",
]


def make_csv(rows: list[list[str]], bom: bool = False) -> str:
    """Write rows as CSV text the way Canvas exports them."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return ("\ufeff" if bom else "") + buffer.getvalue()


def export_row(student_id: str, attempt: str, cells: list[str], name: str = "Someone") -> list[str]:
    return [name, student_id, "", "Section 1", "11", "", "2020-03-29 21:18:10 UTC", attempt,
            *cells, "2", "1", "2.5"]


@pytest.fixture(name="questions")
def fixture_questions() -> dict[str, Question]:
    return {
        "101": Question(id="101", type=QuestionType.ESSAY, name="Essay", prompt="<p>Describe</p>",
                        points=1.0, position=2),
        "102": Question(id="102", type=QuestionType.FITB, name="Blanks", prompt="<p>Fill</p>",
                        points=1.0, position=1),
        "103": Question(id="103", type=QuestionType.OTHER, name="Choice", prompt="<p>Pick</p>",
                        points=1.0, position=3),
    }


@pytest.fixture(name="block_questions")
def fixture_block_questions(questions) -> list[Question]:
    """Questions in export column order."""
    return [questions["101"], questions["102"], questions["103"]]


@pytest.fixture(name="roster")
def fixture_roster() -> list[RosterEntry]:
    return [
        RosterEntry(id=1, login="alice", email="alice@example.edu", name="Alice A", sis_id="900001"),
        RosterEntry(id=2, login="bob", email="bob@example.edu", name="Bob B", sis_id="900002"),
        RosterEntry(id=3, login="carol", email="carol@example.edu", name="Carol C", sis_id="900003"),
    ]


@pytest.fixture(name="export_rows")
def fixture_export_rows() -> list[list[str]]:
    return [
        EXPORT_HEADER,
        export_row("1", "1", ["My essay, with a comma", "1.0", "a\\,b,c", "0.5", "B", "1.0"]),
        export_row("2", "1", ["", "", "", "0.0", "C", "0.0"]),
        export_row("99", "1", ["Preview", "1.0", "x,y", "1.0", "A", "0.0"], name="Test Student"),
    ]


@pytest.fixture(name="export_text")
def fixture_export_text(export_rows) -> str:
    return make_csv(export_rows)


class FakeCatalog:
    """Async question lookup that records every identifier it is asked for."""

    def __init__(self, questions: dict[str, Question]):
        self.questions = questions
        self.calls: list[str] = []

    async def __call__(self, question_id: str) -> Question:
        self.calls.append(question_id)
        return self.questions[question_id]


@pytest.fixture(name="catalog")
def fixture_catalog(questions) -> FakeCatalog:
    return FakeCatalog(questions)
