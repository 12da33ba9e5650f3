"""
Attempt Selection
=================

An export lists one row per submitted attempt. Before conversion the rows
are reduced to a single attempt per student.
"""

from typing import Dict

from conversion.parser import ATTEMPT_HEADER, ID_HEADER, RawTable, attempt_number, last_index
from conversion.errors import FormatError

STRATEGIES = ("first", "last")


def select_attempts(table: RawTable, strategy: str = "last") -> RawTable:
    """
    Keeps one row per student: the lowest ("first") or highest ("last")
    attempt number. Ties keep the earliest row for "first" and the latest
    for "last". Surviving rows keep their relative order.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown attempt strategy {strategy!r}, expected one of {STRATEGIES}")
    if not table:
        raise FormatError("The export has no header row")

    header = table[0]
    attempt_col = last_index(header, ATTEMPT_HEADER)
    id_col = last_index(header, ID_HEADER)
    if attempt_col == -1 or id_col == -1:
        return [list(row) for row in table]

    chosen: Dict[str, int] = {}
    for idx, row in enumerate(table[1:], start=1):
        student_id = row[id_col] if id_col < len(row) else ""
        current = chosen.get(student_id)
        if current is None:
            chosen[student_id] = idx
            continue
        attempt, best = attempt_number(row, attempt_col), attempt_number(table[current], attempt_col)
        if strategy == "first" and attempt < best:
            chosen[student_id] = idx
        elif strategy == "last" and attempt >= best:
            chosen[student_id] = idx

    keep = sorted(chosen.values())
    return [list(header)] + [list(table[idx]) for idx in keep]
