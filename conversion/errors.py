"""
Conversion Errors
=================

Failures that abort a conversion. Rows that cannot be matched to the roster
and roster entries without a submission are resolved by the converter itself
and never raised.
"""

from typing import List, Optional


class FormatError(ValueError):
    """The export does not have the expected column layout."""


class RosterFilterError(ValueError):
    """A login filter names students who are not on the roster."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = missing or []
