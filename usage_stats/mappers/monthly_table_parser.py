"""
usage_stats/mappers/monthly_table_parser.py

Maps a grid classified as monthly into a ``MonthlyDataset``.

Column positions are fixed; header text only ever supplies menu labels:

    0 month | 1..4 menu1..menu4 | 5 unique users | 6 total hits

Only "month" marks row 0 as a header. A localized header such as "월" is
parsed as a data row whose month is the header text.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from usage_stats.config import get_usage_ingestion_settings
from usage_stats.domain.errors import NoUsableRowsError
from usage_stats.domain.usage_dataset import (
    DEFAULT_MENU_LABELS,
    MenuLabels,
    MonthlyDataset,
    MonthlyRecord,
    ParseResult,
    RawGrid,
)
from usage_stats.mappers.row_audit import SkippedRowRecorder
from usage_stats.validators.cell_normalizer import normalize_month, to_number
from usage_stats.validators.format_classifier import cell_at, row_at

logger = logging.getLogger(__name__)

COL_MONTH = 0
COL_MENU1 = 1
COL_MENU2 = 2
COL_MENU3 = 3
COL_MENU4 = 4
COL_UNIQUE_USERS = 5
COL_TOTAL_HITS = 6

MENU_COLUMNS: tuple[int, ...] = (COL_MENU1, COL_MENU2, COL_MENU3, COL_MENU4)

HEADER_TERM = "month"


def has_monthly_header(grid: RawGrid) -> bool:
    """
    Row 0 is a header when its first cell is text containing "month".
    """

    first = cell_at(row_at(grid, 0), COL_MONTH)
    return isinstance(first, str) and HEADER_TERM in first.lower()


def resolve_menu_labels(header_row: Sequence[Any]) -> MenuLabels:
    """
    Read menu display names from header cells, keeping positional defaults
    for blank or non-text cells.
    """

    labels: list[str] = []
    for column, default in zip(MENU_COLUMNS, DEFAULT_MENU_LABELS):
        cell = cell_at(header_row, column)
        if isinstance(cell, str) and cell.strip():
            labels.append(cell.strip())
        else:
            labels.append(default)
    return MenuLabels(*labels)


class MonthlyTableParser:
    """
    Parses monthly menu-hit tables row by row, preserving source order.
    """

    def __init__(
        self,
        *,
        max_skipped_row_details: int | None = None,
        log_skipped_rows: bool | None = None,
    ) -> None:
        settings = get_usage_ingestion_settings()
        self._max_details = (
            max_skipped_row_details
            if max_skipped_row_details is not None
            else settings.max_skipped_row_details
        )
        self._log_rows = log_skipped_rows if log_skipped_rows is not None else settings.log_skipped_rows

    def parse(self, grid: RawGrid) -> ParseResult[MonthlyDataset]:
        """
        Build a monthly dataset from ``grid``.

        Rows whose month cell normalizes to an empty string are skipped.
        Raises ``NoUsableRowsError`` when no row survives.
        """

        header_present = has_monthly_header(grid)
        labels = resolve_menu_labels(row_at(grid, 0)) if header_present else MenuLabels()
        start = 1 if header_present else 0

        recorder = SkippedRowRecorder(
            table="monthly",
            max_details=self._max_details,
            log_rows=self._log_rows,
        )
        records: list[MonthlyRecord] = []

        for index in range(start, len(grid)):
            row = grid[index]
            row_number = index + 1
            if not row:
                recorder.record(row_number=row_number, message="Row is empty.")
                continue

            month_raw = cell_at(row, COL_MONTH)
            month = normalize_month(month_raw)
            if not month:
                recorder.record(
                    row_number=row_number,
                    message="Month cell is empty.",
                    value=month_raw,
                )
                continue

            records.append(
                MonthlyRecord(
                    month=month,
                    menu1=to_number(cell_at(row, COL_MENU1)),
                    menu2=to_number(cell_at(row, COL_MENU2)),
                    menu3=to_number(cell_at(row, COL_MENU3)),
                    menu4=to_number(cell_at(row, COL_MENU4)),
                    unique_users=to_number(cell_at(row, COL_UNIQUE_USERS)),
                    total_hits=to_number(cell_at(row, COL_TOTAL_HITS)),
                )
            )

        if not records:
            raise NoUsableRowsError(
                "No monthly rows could be parsed.",
                rows_skipped=recorder.count,
            )

        logger.debug(
            "Parsed monthly grid: header=%s accepted=%d skipped=%d",
            header_present,
            len(records),
            recorder.count,
        )
        return ParseResult(
            payload=MonthlyDataset(records=tuple(records), menu_labels=labels),
            rows_accepted=len(records),
            rows_skipped=recorder.count,
            skipped_rows=recorder.details,
        )


def parse_monthly(grid: RawGrid) -> MonthlyDataset:
    """Parse ``grid`` with default settings and return only the dataset."""
    return MonthlyTableParser().parse(grid).payload
