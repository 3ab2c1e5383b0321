"""
usage_stats/domain/usage_summary.py

Aggregate records derived from usage datasets.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class YearlyAggregate:
    """
    Sums and rounded per-month averages for one calendar year.
    """

    year: str
    count: int
    menu1_sum: float
    menu2_sum: float
    menu3_sum: float
    menu4_sum: float
    menu_all_sum: float
    user_sum: float
    hit_sum: float
    menu1_avg: int
    menu2_avg: int
    menu3_avg: int
    menu4_avg: int
    menu_all_avg: int
    user_avg: int
    hit_avg: int


@dataclass(frozen=True)
class MonthlyKpi:
    """
    Headline numbers for one monthly dataset.

    ``latest_month`` is the month of the last record in upload order, which
    is not necessarily the chronologically latest month.
    """

    month_count: int
    menu1_sum: float
    menu2_sum: float
    menu3_sum: float
    menu4_sum: float
    menu_all_sum: float
    user_sum: float
    hit_sum: float
    menu_all_avg: int
    user_avg: int
    hit_avg: int
    latest_month: str
    latest_year: YearlyAggregate | None
    yearly: tuple[YearlyAggregate, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DailyDatasetStats:
    """
    Derived view of one daily dataset.
    """

    dataset_id: str
    file_name: str
    avg: int
    max: float
    min: float
    start_date: str
    end_date: str
    days: int
