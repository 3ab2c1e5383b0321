"""
kpi/monthly_usage.py

Monthly menu-hit KPI formula implementation.

Expected inputs
---------------
months : list[str]
    Canonical ``YYYY-MM`` labels in source row order.
menu1, menu2, menu3, menu4 : list[float]
    Per-month hit counts for each menu, aligned with ``months``.
unique_users : list[float]
    Per-month unique user counts.
total_hits : list[float]
    Per-month total hit counts.

Formulas
--------
menu_all_sum  = menu1_sum + menu2_sum + menu3_sum + menu4_sum
*_avg         = round(sum / month_count)       ties away from zero
latest_month  = months[-1]                     upload order, not calendar order
yearly        = the same sums and averages grouped by months[i][:4]
latest_year   = yearly entry with the greatest year string

Averages over zero months are 0.
"""

from __future__ import annotations

from typing import Any

from kpi.base import BaseKPIFormula, safe_average

MENU_KEYS: tuple[str, ...] = ("menu1", "menu2", "menu3", "menu4")
SERIES_KEYS: tuple[str, ...] = (*MENU_KEYS, "unique_users", "total_hits")

_NO_MONTH = "-"


class MonthlyUsageKPIFormula(BaseKPIFormula):
    """
    Global and per-year rollups over monthly usage series.

    All arithmetic is self-contained.  No I/O, no logging, no side effects.
    """

    def calculate(self, inputs: dict[str, Any]) -> dict[str, Any]:
        """
        Compute global sums, rounded averages and yearly aggregates.

        Returns
        -------
        dict
            Keys: ``month_count``, ``menu1_sum`` .. ``menu4_sum``,
            ``menu_all_sum``, ``user_sum``, ``hit_sum``, ``menu_all_avg``,
            ``user_avg``, ``hit_avg``, ``latest_month``, ``yearly`` (list
            sorted by year) and ``latest_year`` (dict or None).
        """
        months: list[str] = list(inputs["months"])
        series = {key: list(inputs[key]) for key in SERIES_KEYS}
        month_count = len(months)

        menu_sums = {f"{key}_sum": sum(series[key]) for key in MENU_KEYS}
        menu_all_sum = sum(menu_sums.values())
        user_sum = sum(series["unique_users"])
        hit_sum = sum(series["total_hits"])

        yearly = _yearly_aggregates(months, series)

        return {
            "month_count": month_count,
            **menu_sums,
            "menu_all_sum": menu_all_sum,
            "user_sum": user_sum,
            "hit_sum": hit_sum,
            "menu_all_avg": safe_average(menu_all_sum, month_count),
            "user_avg": safe_average(user_sum, month_count),
            "hit_avg": safe_average(hit_sum, month_count),
            "latest_month": months[-1] if months else _NO_MONTH,
            "yearly": yearly,
            "latest_year": yearly[-1] if yearly else None,
        }


# ---------------------------------------------------------------------------
# Pure formula functions
# ---------------------------------------------------------------------------


def year_of(month: str) -> str:
    """Year key of a month label: its first four characters."""
    return month[:4]


def _yearly_aggregates(
    months: list[str],
    series: dict[str, list[float]],
) -> list[dict[str, Any]]:
    """
    Group every series by year and derive per-year sums and averages.

    Returns one dict per year, sorted ascending by year string.
    """
    buckets: dict[str, dict[str, float]] = {}

    for index, month in enumerate(months):
        year = year_of(month)
        if not year:
            continue
        bucket = buckets.setdefault(year, {key: 0 for key in (*SERIES_KEYS, "count")})
        for key in SERIES_KEYS:
            values = series[key]
            bucket[key] += values[index] if index < len(values) else 0
        bucket["count"] += 1

    return [_year_summary(year, buckets[year]) for year in sorted(buckets)]


def _year_summary(year: str, bucket: dict[str, float]) -> dict[str, Any]:
    count = int(bucket["count"])
    menu_all_sum = sum(bucket[key] for key in MENU_KEYS)
    summary: dict[str, Any] = {"year": year, "count": count}
    for key in MENU_KEYS:
        summary[f"{key}_sum"] = bucket[key]
    summary["menu_all_sum"] = menu_all_sum
    summary["user_sum"] = bucket["unique_users"]
    summary["hit_sum"] = bucket["total_hits"]
    for key in MENU_KEYS:
        summary[f"{key}_avg"] = safe_average(bucket[key], count)
    summary["menu_all_avg"] = safe_average(menu_all_sum, count)
    summary["user_avg"] = safe_average(bucket["unique_users"], count)
    summary["hit_avg"] = safe_average(bucket["total_hits"], count)
    return summary
