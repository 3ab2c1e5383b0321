"""
usage_stats/mappers/daily_table_parser.py

Maps a grid classified as daily into date-sorted ``DailyRecord`` rows.

Columns are fixed: 0 date, 1 users.

Only "date" marks row 0 as a header. A grid classified as daily through a
localized header such as "일자" keeps that row as a data record, with the
header text as its date and 0 users.
"""

from __future__ import annotations

import logging

from usage_stats.config import get_usage_ingestion_settings
from usage_stats.domain.errors import NoUsableRowsError
from usage_stats.domain.usage_dataset import DailyRecord, ParseResult, RawGrid
from usage_stats.mappers.row_audit import SkippedRowRecorder
from usage_stats.validators.cell_normalizer import normalize_date, to_number
from usage_stats.validators.format_classifier import cell_at, row_at

logger = logging.getLogger(__name__)

COL_DATE = 0
COL_USERS = 1

HEADER_TERM = "date"


def has_daily_header(grid: RawGrid) -> bool:
    """
    Row 0 is a header when its first cell is text containing "date".
    """

    first = cell_at(row_at(grid, 0), COL_DATE)
    return isinstance(first, str) and HEADER_TERM in first.lower()


class DailyTableParser:
    """
    Parses daily active-user tables.
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

    def parse(self, grid: RawGrid) -> ParseResult[tuple[DailyRecord, ...]]:
        """
        Build daily records from ``grid``, sorted ascending by date.

        Dates are compared as strings, which orders correctly only for
        zero-padded ``YYYY-MM-DD`` values. Raises ``NoUsableRowsError``
        when no row survives.
        """

        header_present = has_daily_header(grid)
        start = 1 if header_present else 0

        recorder = SkippedRowRecorder(
            table="daily",
            max_details=self._max_details,
            log_rows=self._log_rows,
        )
        records: list[DailyRecord] = []

        for index in range(start, len(grid)):
            row = grid[index]
            row_number = index + 1
            if not row:
                recorder.record(row_number=row_number, message="Row is empty.")
                continue

            date_raw = cell_at(row, COL_DATE)
            date = normalize_date(date_raw)
            if not date:
                recorder.record(
                    row_number=row_number,
                    message="Date cell is empty.",
                    value=date_raw,
                )
                continue

            records.append(DailyRecord(date=date, users=to_number(cell_at(row, COL_USERS))))

        if not records:
            raise NoUsableRowsError(
                "No daily user rows could be parsed.",
                rows_skipped=recorder.count,
            )

        records.sort(key=lambda record: record.date)
        logger.debug(
            "Parsed daily grid: header=%s accepted=%d skipped=%d",
            header_present,
            len(records),
            recorder.count,
        )
        return ParseResult(
            payload=tuple(records),
            rows_accepted=len(records),
            rows_skipped=recorder.count,
            skipped_rows=recorder.details,
        )


def parse_daily_users(grid: RawGrid) -> list[DailyRecord]:
    """Parse ``grid`` with default settings and return only the records."""
    return list(DailyTableParser().parse(grid).payload)
