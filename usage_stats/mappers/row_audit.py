"""
usage_stats/mappers/row_audit.py

Bookkeeping for rows dropped while parsing a grid.
"""

from __future__ import annotations

import logging
from typing import Any

from usage_stats.domain.usage_dataset import SkippedRow

logger = logging.getLogger(__name__)


class SkippedRowRecorder:
    """
    Counts every skipped row and keeps a capped list of details.
    """

    def __init__(self, *, table: str, max_details: int, log_rows: bool) -> None:
        self._table = table
        self._max_details = max(1, max_details)
        self._log_rows = log_rows
        self._details: list[SkippedRow] = []
        self.count = 0

    def record(self, *, row_number: int, message: str, value: Any = None) -> None:
        self.count += 1
        detail = SkippedRow(
            row_number=row_number,
            message=message,
            value=None if value is None else str(value),
        )
        if self._log_rows:
            logger.warning(
                "Skipped %s row=%s message=%s value=%r",
                self._table,
                detail.row_number,
                detail.message,
                detail.value,
            )
        if len(self._details) < self._max_details:
            self._details.append(detail)

    @property
    def details(self) -> tuple[SkippedRow, ...]:
        return tuple(self._details)
