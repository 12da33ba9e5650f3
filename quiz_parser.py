"""
Canvas Quiz Parser
==================

Fetches the question catalog of a Canvas quiz and combines it with a
"student analysis" export and the class roster into one answer record per
student, plus a blank template record.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from canvas.canvas_client import CanvasClient
from canvas.config import CanvasConfig
from conversion.attempts import select_attempts
from conversion.errors import RosterFilterError
from conversion.parser import read_table
from conversion.students import convert_table
from models.quiz_models import ConversionResult, RosterEntry
from utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


# ==========================================
# INPUTS
# ==========================================

def read_export(path) -> str:
    """Reads a CSV export from disk; a leading byte-order mark is dropped."""
    return Path(path).read_text(encoding="utf-8-sig")


def load_logins(values: Optional[Iterable[str]]) -> List[str]:
    """
    Expands a login filter. A value starting with "@" names a file holding
    one login per line.
    """
    logins = []
    for value in values or []:
        if value.startswith("@"):
            logins.extend(Path(value[1:]).read_text(encoding="utf-8").splitlines())
        else:
            logins.append(value)
    return sorted({login.strip() for login in logins if login.strip()})


def filter_roster(roster: Sequence[RosterEntry], logins: Sequence[str], strict: bool = False) -> List[RosterEntry]:
    """Keeps the roster entries named by ``logins`` (all when empty), sorted by login."""
    selected = [s for s in roster if not logins or s.login in logins]
    selected.sort(key=lambda s: s.login)

    if logins and len(selected) != len(logins):
        known = {s.login for s in selected}
        missing = [login for login in logins if login not in known]
        message = (
            f"Number of students to be processed ({len(selected)}) is not the same "
            f"as the filter ({len(logins)})"
        )
        if strict:
            raise RosterFilterError(message, missing)
        logger.warning("%s; not on the roster: %s", message, ", ".join(missing))

    return selected


# ==========================================
# MAIN FLOW
# ==========================================

async def parse_quiz(config: CanvasConfig, csv_text: str, roster: Sequence[RosterEntry],
                     logins: Optional[Iterable[str]] = None, strict: bool = False,
                     attempt_strategy: str = "last", include_no_submissions: bool = False,
                     client: Optional[CanvasClient] = None, verbose: bool = False) -> ConversionResult:
    """
    Main execution flow:
    1. Filter the roster by login
    2. Keep one attempt per student
    3. Fetch the questions and convert the export
    4. Drop students without a submission unless asked to keep them
    5. Sort students by login

    With ``verbose`` progress is logged to the console at INFO level.
    """
    if verbose:
        setup_logging(logging.INFO)

    students = filter_roster(roster, load_logins(logins), strict)

    table = select_attempts(read_table(csv_text), attempt_strategy)

    owns_client = client is None
    if owns_client:
        client = CanvasClient(config)
    try:
        result = await convert_table(table, students, client.fetch_question)
    finally:
        if owns_client:
            await client.close()

    if not include_no_submissions:
        result.students = [s for s in result.students if s.attempt != 0]
    result.students.sort(key=lambda s: s.login)
    logger.info("Converted %d students and %d questions", len(result.students), len(result.questions))
    return result
