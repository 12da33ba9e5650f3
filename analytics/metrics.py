"""
Analytics and Metrics Calculation Module
=========================================

This module flattens converted quiz records into pandas structures.
"""

import collections
from typing import Tuple

import pandas as pd

from models.quiz_models import ConversionResult


def question_label(index: int) -> str:
    return f"Q{index + 1}"


def calculate_analytics(result: ConversionResult) -> Tuple[pd.DataFrame, pd.Series]:
    """
    Processes converted records to compute:
    1. Which questions each student answered
    2. How many students left each question unanswered
    """
    flat_data = []
    unanswered = collections.OrderedDict(
        (question.id, 0) for question in result.questions
    )

    for student in result.students:
        entry = {"Student": student.login, "Attempt": student.attempt}

        for question_idx, response in enumerate(student.responses):
            entry[f"{question_label(question_idx)} answered"] = response.answered

            if not response.answered:
                unanswered[response.question.id] += 1

        flat_data.append(entry)

    columns = ["Student", "Attempt"] + [
        f"{question_label(i)} answered" for i in range(len(result.questions))
    ]
    df = pd.DataFrame(flat_data, columns=columns)
    series_unanswered = pd.Series(unanswered, dtype="int64").sort_values(
        ascending=False, kind="stable")

    return df, series_unanswered
