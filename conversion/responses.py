"""
Answer Decoding
===============

Turns the raw text of one answer cell into a typed quiz response. The shape
of the response depends on the type of the question it answers.
"""

from typing import Callable, Dict, List, Optional

from models.quiz_models import (
    EssayResponse,
    FITBResponse,
    OtherResponse,
    Question,
    QuestionType,
    QuizResponse,
)

ESCAPED_COMMA = "\\,"

# Private use area; never produced by Canvas for a typed answer.
_PLACEHOLDER_START = 0xE000


def _placeholder_for(raw: str) -> str:
    code = _PLACEHOLDER_START
    while chr(code) in raw:
        code += 1
    return chr(code)


def split_blanks(raw: str) -> List[str]:
    """
    Splits a fill-in-the-blank answer into one string per blank.

    Blanks are separated by commas and a literal comma inside a blank is
    written as backslash-comma. Escaped commas are swapped for a placeholder
    that does not occur in the cell, the text is split on the remaining
    commas, and the placeholder is turned back into a comma in every piece.

    >>> split_blanks("a\\\\,b,c")
    ['a,b', 'c']
    """
    placeholder = _placeholder_for(raw)
    sanitized = raw.replace(ESCAPED_COMMA, placeholder)
    return [part.replace(placeholder, ",") for part in sanitized.split(",")]


def _decode_essay(question: Question, raw: Optional[str]) -> EssayResponse:
    return EssayResponse(question=question, response=raw)


def _decode_fitb(question: Question, raw: Optional[str]) -> FITBResponse:
    return FITBResponse(question=question, response=None if raw is None else split_blanks(raw))


def _decode_other(question: Question, raw: Optional[str]) -> OtherResponse:
    return OtherResponse(question=question, response=raw)


DECODERS: Dict[QuestionType, Callable[[Question, Optional[str]], QuizResponse]] = {
    QuestionType.ESSAY: _decode_essay,
    QuestionType.FITB: _decode_fitb,
    QuestionType.OTHER: _decode_other,
}


def decode_response(raw: str, question: Question, answered: Optional[bool] = None) -> QuizResponse:
    """
    Decodes one answer cell for the given question.

    ``answered`` tells whether the student answered at all; by default an
    empty cell means no answer. When the caller knows the question was
    answered, an empty cell decodes to an empty answer instead.
    Decoding never fails.
    """
    if answered is None:
        answered = raw != ""
    decoder = DECODERS.get(question.type, _decode_other)
    return decoder(question, raw if answered else None)


def blank_response(question: Question) -> QuizResponse:
    """The unanswered response for a question."""
    return decode_response("", question)
