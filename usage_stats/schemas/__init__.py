"""
usage_stats/schemas package marker.
"""

from usage_stats.schemas.usage_summary import (
    DailyDatasetStatsResponse,
    MonthlyKpiResponse,
    SkippedRowResponse,
    UploadOutcomeResponse,
    UsageSessionSnapshotResponse,
    YearlyAggregateResponse,
)

__all__ = [
    "DailyDatasetStatsResponse",
    "MonthlyKpiResponse",
    "SkippedRowResponse",
    "UploadOutcomeResponse",
    "UsageSessionSnapshotResponse",
    "YearlyAggregateResponse",
]
