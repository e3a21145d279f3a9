"""
Statement classification for verb-gated SQL.

A statement's class is decided by its leading keyword alone: whitespace is
skipped, case is ignored, and the keyword must end at a word boundary.
Nothing else about the statement is inspected, so a leading comment makes it
unclassified.
"""

import re
from enum import Enum


class StatementClass(Enum):
    """Class of a SQL statement, as seen by the verb gate."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UNCLASSIFIED = "UNCLASSIFIED"


_SELECT = re.compile(r"^\s*SELECT\b", re.IGNORECASE)
_INSERT = re.compile(r"^\s*INSERT\b", re.IGNORECASE)


def is_select(statement: str | None) -> bool:
    return bool(_SELECT.match(statement or ""))


def is_insert(statement: str | None) -> bool:
    return bool(_INSERT.match(statement or ""))


def classify(statement: str | None) -> StatementClass:
    """Classify ``statement`` by its leading keyword.

    Args:
        statement: Raw SQL text (None is treated as empty)

    Returns:
        StatementClass: SELECT, INSERT, or UNCLASSIFIED

    Example:
        >>> classify("  select * from patient")
        <StatementClass.SELECT: 'SELECT'>
        >>> classify("UPDATE patient SET name = 'x'")
        <StatementClass.UNCLASSIFIED: 'UNCLASSIFIED'>
    """
    if is_select(statement):
        return StatementClass.SELECT
    if is_insert(statement):
        return StatementClass.INSERT
    return StatementClass.UNCLASSIFIED
