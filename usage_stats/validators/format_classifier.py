"""
usage_stats/validators/format_classifier.py

Heuristic detection of which known table shape a raw grid represents.

Rules are evaluated in priority order and the first match wins:

    1. header text in column 0 names a month  -> monthly
    2. header text in column 0 names a date   -> dailyUsers
    3. five or more populated cells in row 1  -> monthly
    4. exactly two populated cells in row 1,
       the first one date-shaped              -> dailyUsers

Each rule is an independent predicate over the grid, so a new table shape
is added by appending a new ``ClassificationRule``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from usage_stats.domain.usage_dataset import FileKind, RawGrid
from usage_stats.validators.cell_normalizer import CANONICAL_DATE_PATTERN, normalize_date

logger = logging.getLogger(__name__)

MONTH_HEADER_TERMS: tuple[str, ...] = ("month", "월")
DATE_HEADER_TERMS: tuple[str, ...] = ("date", "일자")

MIN_MONTHLY_POPULATED_COLUMNS = 5
DAILY_POPULATED_COLUMNS = 2


@dataclass(frozen=True)
class ClassificationRule:
    """
    One named predicate mapped to the table shape it signals.
    """

    name: str
    kind: FileKind
    predicate: Callable[[RawGrid], bool]


def row_at(grid: RawGrid, index: int) -> Sequence[Any]:
    """
    Return the row at ``index``, or an empty row when absent.
    """

    if index >= len(grid):
        return ()
    return grid[index] or ()


def cell_at(row: Sequence[Any], index: int) -> Any:
    """
    Return the cell at ``index``, or None when the row is too short.
    """

    if index >= len(row):
        return None
    return row[index]


def _header_text(grid: RawGrid) -> str:
    first = cell_at(row_at(grid, 0), 0)
    return first.lower() if isinstance(first, str) else ""


def _populated_count(row: Sequence[Any]) -> int:
    return sum(1 for value in row if value is not None and value != "")


def header_names_month(grid: RawGrid) -> bool:
    header = _header_text(grid)
    return any(term in header for term in MONTH_HEADER_TERMS)


def header_names_date(grid: RawGrid) -> bool:
    header = _header_text(grid)
    return any(term in header for term in DATE_HEADER_TERMS)


def has_monthly_column_count(grid: RawGrid) -> bool:
    return _populated_count(row_at(grid, 1)) >= MIN_MONTHLY_POPULATED_COLUMNS


def has_daily_column_count(grid: RawGrid) -> bool:
    """
    Exactly two populated cells in row 1, the first of which reads as a date.
    """
    row = row_at(grid, 1)
    if _populated_count(row) != DAILY_POPULATED_COLUMNS:
        return False
    return bool(CANONICAL_DATE_PATTERN.match(normalize_date(cell_at(row, 0))))


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("header_month", FileKind.MONTHLY, header_names_month),
    ClassificationRule("header_date", FileKind.DAILY_USERS, header_names_date),
    ClassificationRule("column_count_monthly", FileKind.MONTHLY, has_monthly_column_count),
    ClassificationRule("column_count_daily", FileKind.DAILY_USERS, has_daily_column_count),
)


class FormatClassifier:
    """
    Classifies raw grids by first-match over an ordered rule list.
    """

    def __init__(self, rules: Sequence[ClassificationRule] | None = None) -> None:
        self._rules = tuple(rules) if rules is not None else DEFAULT_RULES

    def classify(self, grid: RawGrid) -> FileKind:
        """
        Return the table shape of ``grid``; ``UNKNOWN`` for fewer than two rows.
        """

        if not grid or len(grid) < 2:
            return FileKind.UNKNOWN

        for rule in self._rules:
            if rule.predicate(grid):
                logger.debug("Grid classified as %s by rule %s", rule.kind.value, rule.name)
                return rule.kind

        logger.debug("Grid matched no classification rule")
        return FileKind.UNKNOWN


def classify_grid(grid: RawGrid) -> FileKind:
    """Classify ``grid`` with the default rules."""
    return FormatClassifier().classify(grid)
