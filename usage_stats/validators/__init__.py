"""
usage_stats/validators package marker.
"""

from usage_stats.validators.cell_normalizer import normalize_date, normalize_month, to_number
from usage_stats.validators.format_classifier import (
    ClassificationRule,
    FormatClassifier,
    classify_grid,
)

__all__ = [
    "ClassificationRule",
    "FormatClassifier",
    "classify_grid",
    "normalize_date",
    "normalize_month",
    "to_number",
]
