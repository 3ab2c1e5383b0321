"""
usage_stats/domain package marker.
"""

from usage_stats.domain.errors import (
    EmptyGridError,
    GridDecodeError,
    NoUsableRowsError,
    UnclassifiableFormatError,
    UsageIngestionError,
)
from usage_stats.domain.usage_dataset import (
    DEFAULT_MENU_LABELS,
    DailyDataset,
    DailyRecord,
    FileKind,
    MenuLabels,
    MonthlyDataset,
    MonthlyRecord,
    ParseResult,
    RawGrid,
    SkippedRow,
)
from usage_stats.domain.usage_summary import DailyDatasetStats, MonthlyKpi, YearlyAggregate

__all__ = [
    "DEFAULT_MENU_LABELS",
    "DailyDataset",
    "DailyDatasetStats",
    "DailyRecord",
    "EmptyGridError",
    "FileKind",
    "GridDecodeError",
    "MenuLabels",
    "MonthlyDataset",
    "MonthlyKpi",
    "MonthlyRecord",
    "NoUsableRowsError",
    "ParseResult",
    "RawGrid",
    "SkippedRow",
    "UnclassifiableFormatError",
    "UsageIngestionError",
    "YearlyAggregate",
]
