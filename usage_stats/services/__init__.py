"""
usage_stats/services package marker.
"""

from usage_stats.services.aggregation_service import AggregationService
from usage_stats.services.upload_service import (
    UploadOutcome,
    UsageUploadService,
    get_usage_upload_service,
)

__all__ = [
    "AggregationService",
    "UploadOutcome",
    "UsageUploadService",
    "get_usage_upload_service",
]
