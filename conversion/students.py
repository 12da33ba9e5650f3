"""
Student Records
===============

Builds one answer record per roster entry from a parsed export, plus a blank
template record. Every record lists one response per question, in the same
canonical question order.
"""

from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from conversion.errors import FormatError
from conversion.parser import RawTable, attempt_number, locate_columns, question_ids, read_table
from conversion.responses import blank_response, decode_response
from models.quiz_models import (
    ColumnMap,
    ConversionResult,
    Question,
    QuizResponse,
    RosterEntry,
    StudentRecord,
)
from utils.logging import get_logger

logger = get_logger(__name__)

TEMPLATE_ID = "-1"
TEMPLATE_BLANK = "_______________"
TEMPLATE_EMAIL = "null"

FetchQuestion = Callable[[str], Awaitable[Question]]


def _numeric_id(question_id: str) -> Tuple[int, int, str]:
    try:
        return 0, int(question_id), ""
    except ValueError:
        return 1, 0, question_id


def question_sort_key(question: Question) -> Tuple[int, int, int, str]:
    """Position first, then the identifier read as an integer."""
    return (question.position, *_numeric_id(question.id))


def order_questions(questions: Sequence[Question]) -> List[int]:
    """Indices of ``questions`` in canonical order."""
    return sorted(range(len(questions)), key=lambda i: question_sort_key(questions[i]))


def _cell(row: List[str], idx: int) -> str:
    return row[idx] if 0 <= idx < len(row) else ""


def build_record(row: List[str], columns: ColumnMap, questions: Sequence[Question],
                 roster: Dict[str, RosterEntry], order: Sequence[int]) -> Optional[StudentRecord]:
    """
    Builds the record of one export row, or None when the row's identifier
    is not on the roster. Display fields come from the roster entry.
    """
    student_id = _cell(row, columns.id_col)
    entry = roster.get(student_id)
    if entry is None:
        return None

    decoded: List[QuizResponse] = []
    for k, question in enumerate(questions):
        answered = _cell(row, columns.marker_col(k)) != ""
        decoded.append(decode_response(_cell(row, columns.answer_col(k)), question, answered))

    return StudentRecord(
        id=student_id,
        login=entry.login,
        email=entry.email,
        name=entry.name,
        sis_id=entry.sis_id,
        responses=[decoded[i] for i in order],
        attempt=attempt_number(row, columns.attempt_col),
    )


def blank_record(entry: RosterEntry, questions: Sequence[Question]) -> StudentRecord:
    """Record of a roster entry without a submission. ``questions`` must be in canonical order."""
    return StudentRecord(
        id=str(entry.id),
        login=entry.login,
        email=entry.email,
        name=entry.name,
        sis_id=entry.sis_id,
        responses=[blank_response(q) for q in questions],
    )


def template_record(questions: Sequence[Question]) -> StudentRecord:
    return StudentRecord(
        id=TEMPLATE_ID,
        login=TEMPLATE_BLANK,
        email=TEMPLATE_EMAIL,
        name=TEMPLATE_BLANK,
        sis_id=TEMPLATE_BLANK,
        responses=[blank_response(q) for q in questions],
    )


def merge_roster(questions: Sequence[Question], roster: Sequence[RosterEntry],
                 built: Dict[str, StudentRecord]) -> List[StudentRecord]:
    """One record per roster entry, in roster order; entries without a built record get a blank one."""
    students = []
    synthesized = 0
    for entry in roster:
        record = built.get(str(entry.id))
        if record is None:
            record = blank_record(entry, questions)
            synthesized += 1
        students.append(record)

    logger.info("Parsed %d submissions, synthesized %d blank records", len(students) - synthesized, synthesized)
    return students


def convert(table: RawTable, roster: Sequence[RosterEntry], questions: Sequence[Question]) -> ConversionResult:
    """
    Converts a parsed export into complete, ordered student records.

    ``questions`` lists the catalog in block order, one question per
    (answer, score) column pair. The result holds the questions in canonical
    order, a blank template record and one record per roster entry.
    """
    if not table:
        raise FormatError("The export has no header row")

    header = table[0]
    columns = locate_columns(header)
    if columns.question_count != len(questions):
        raise FormatError(
            f"Export has {columns.question_count} questions but {len(questions)} were supplied"
        )

    order = order_questions(questions)
    ordered = [questions[i] for i in order]
    by_id = {str(entry.id): entry for entry in roster}

    built: Dict[str, StudentRecord] = {}
    for row in table[1:]:
        record = build_record(row, columns, questions, by_id, order)
        if record is None:
            logger.debug("Dropping row for unknown student %r", _cell(row, columns.id_col))
            continue
        if record.id in built:
            logger.debug("Ignoring repeated row for student %s", record.id)
            continue
        built[record.id] = record

    return ConversionResult(
        questions=ordered,
        template=template_record(ordered),
        students=merge_roster(ordered, roster, built),
    )


async def fetch_catalog(header: List[str], fetch_question: FetchQuestion) -> List[Question]:
    """
    Fetches the question of every (answer, score) column pair of the header,
    in column order. Each identifier is fetched once.
    """
    fetched: Dict[str, Question] = {}
    questions = []
    for question_id in question_ids(header, locate_columns(header)):
        if question_id not in fetched:
            fetched[question_id] = await fetch_question(question_id)
            logger.debug("Fetched question %s", question_id)
        questions.append(fetched[question_id])
    return questions


async def convert_table(table: RawTable, roster: Sequence[RosterEntry], fetch_question: FetchQuestion) -> ConversionResult:
    """Fetches the catalog of an already parsed export, then converts it."""
    if not table:
        raise FormatError("The export has no header row")
    questions = await fetch_catalog(table[0], fetch_question)
    return convert(table, roster, questions)


async def parse_responses(data: str, roster: Sequence[RosterEntry], fetch_question: FetchQuestion) -> ConversionResult:
    """
    Parses the text of an export and builds the student records.

    All questions are fetched before any answer is decoded.
    """
    return await convert_table(read_table(data), roster, fetch_question)
