"""
Exceptions for grid ingestion flows.

Each exception carries the outcome code the upload service reports for it.
"""

from __future__ import annotations

from usage_stats.failure_codes import (
    FORMAT_UNRECOGNIZED,
    NO_DATA,
    NO_USABLE_ROWS,
    READ_FAILED,
)


class UsageIngestionError(ValueError):
    """Base exception for grid ingestion failures."""

    code: str = ""


class EmptyGridError(UsageIngestionError):
    """Raised when a grid has fewer than two rows."""

    code = NO_DATA


class UnclassifiableFormatError(UsageIngestionError):
    """Raised when a grid matches none of the known table shapes."""

    code = FORMAT_UNRECOGNIZED


class NoUsableRowsError(UsageIngestionError):
    """Raised when every data row was rejected by the parser."""

    code = NO_USABLE_ROWS

    def __init__(self, message: str, *, rows_skipped: int = 0) -> None:
        super().__init__(message)
        self.rows_skipped = rows_skipped


class GridDecodeError(UsageIngestionError):
    """Raised when spreadsheet bytes cannot be decoded into a grid."""

    code = READ_FAILED
