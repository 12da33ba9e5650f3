"""
CSV Parser Module for Canvas Quiz Exports
=========================================

This module turns the raw text of a Canvas "student analysis" report into a
table of text cells and locates the structural columns of that table. The
layout of the export is not fixed: the student identifier and the block of
(answer, score) column pairs are found through sentinel header names.
"""

import io
from typing import List

import pandas as pd

from conversion.errors import FormatError
from models.quiz_models import ColumnMap
from utils.logging import get_logger

logger = get_logger(__name__)

RawTable = List[List[str]]

ID_HEADER = "id"
SUBMITTED_HEADER = "submitted"
ATTEMPT_HEADER = "attempt"
N_CORRECT_HEADER = "n correct"

BOM = "\ufeff"


def read_table(text: str) -> RawTable:
    """
    Parses CSV text into rows of text cells. Row 0 is the header.
    A leading byte-order mark is dropped and short rows are padded.
    """
    if text.startswith(BOM):
        text = text[len(BOM):]

    try:
        frame = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise FormatError("The export is empty") from e
    except pd.errors.ParserError as e:
        raise FormatError(f"The export is not valid CSV: {e}") from e

    frame = frame.fillna("")
    table = [list(row) for row in frame.itertuples(index=False, name=None)]
    logger.debug("Read %d rows of %d columns", len(table), frame.shape[1])
    return table


def last_index(header: List[str], token: str) -> int:
    for idx in range(len(header) - 1, -1, -1):
        if header[idx] == token:
            return idx
    return -1


def locate_columns(header: List[str]) -> ColumnMap:
    """
    Finds the identifier column and the question block of an export header.

    The block starts right after the last "submitted" or "attempt" column,
    whichever comes later, and stops (exclusive) at the last "n correct"
    column. Raises FormatError when a sentinel is missing or the block does
    not hold whole (answer, score) pairs.
    """
    id_col = last_index(header, ID_HEADER)
    if id_col == -1:
        raise FormatError(f"Missing {ID_HEADER!r} column in export header")

    attempt_col = last_index(header, ATTEMPT_HEADER)
    anchor = max(last_index(header, SUBMITTED_HEADER), attempt_col)
    if anchor == -1:
        raise FormatError(
            f"Missing {SUBMITTED_HEADER!r} or {ATTEMPT_HEADER!r} column in export header"
        )

    stop = last_index(header, N_CORRECT_HEADER)
    if stop == -1:
        raise FormatError(f"Missing {N_CORRECT_HEADER!r} column in export header")

    start = anchor + 1
    width = stop - start
    if width < 0:
        raise FormatError(f"{N_CORRECT_HEADER!r} column precedes the question block")
    if width % 2 != 0:
        raise FormatError(f"Question block [{start}, {stop}) has odd width {width}")

    return ColumnMap(id_col=id_col, start=start, stop=stop, attempt_col=attempt_col)


def question_ids(header: List[str], columns: ColumnMap) -> List[str]:
    """Question identifiers of the block, in column order ("<id>: <text>" headers)."""
    return [
        header[columns.answer_col(k)].split(":", 1)[0].strip()
        for k in range(columns.question_count)
    ]


def attempt_number(row: List[str], attempt_col: int) -> int:
    """Attempt number of a row; 1 when there is no attempt column or the cell is not a number."""
    if not 0 <= attempt_col < len(row):
        return 1
    try:
        return int(row[attempt_col])
    except ValueError:
        return 1
