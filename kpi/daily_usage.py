"""
kpi/daily_usage.py

Daily active-user KPI formula implementation.

Expected inputs
---------------
dates : list[str]
    ``YYYY-MM-DD`` labels, already sorted ascending.
users : list[float]
    User counts aligned with ``dates``.

Formulas
--------
avg        = round(sum(users) / len(users))   ties away from zero
max / min  = max(users) / min(users)
start_date = dates[0]                          positional, no re-scan
end_date   = dates[-1]

An empty series reports 0 for every number and "-" for both dates.
"""

from __future__ import annotations

from typing import Any

from kpi.base import BaseKPIFormula, safe_average

_NO_DATE = "-"


class DailyUsageKPIFormula(BaseKPIFormula):
    """
    Summary statistics for one daily dataset.
    """

    def calculate(self, inputs: dict[str, Any]) -> dict[str, Any]:
        dates: list[str] = list(inputs["dates"])
        users: list[float] = list(inputs["users"])

        return {
            "avg": safe_average(sum(users), len(users)),
            "max": max(users) if users else 0,
            "min": min(users) if users else 0,
            "start_date": dates[0] if dates else _NO_DATE,
            "end_date": dates[-1] if dates else _NO_DATE,
            "days": len(dates),
        }
