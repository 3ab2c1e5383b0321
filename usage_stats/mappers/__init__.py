"""
usage_stats/mappers package marker.
"""

from usage_stats.mappers.daily_table_parser import DailyTableParser, parse_daily_users
from usage_stats.mappers.monthly_table_parser import MonthlyTableParser, parse_monthly

__all__ = [
    "DailyTableParser",
    "MonthlyTableParser",
    "parse_daily_users",
    "parse_monthly",
]
