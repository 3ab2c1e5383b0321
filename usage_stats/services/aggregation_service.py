"""
usage_stats/services/aggregation_service.py

Aggregation layer for usage KPIs.

Translates typed datasets into the plain series the ``kpi`` formulas
consume, and wraps the formula output back into frozen summary records
for the presentation layer.

Monthly rollups
---------------
Global sums of the six metrics, rounded averages over the month count,
the last month in upload order, and per-year aggregates keyed by the first
four characters of each month label.

Daily rollups
-------------
Each daily dataset is summarized on its own; there is no cross-dataset
merge and no global daily figure.

No arithmetic lives here. Formulas belong to ``kpi.monthly_usage`` and
``kpi.daily_usage``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from kpi.daily_usage import DailyUsageKPIFormula
from kpi.monthly_usage import MonthlyUsageKPIFormula
from usage_stats.domain.usage_dataset import DailyDataset, MonthlyDataset
from usage_stats.domain.usage_summary import DailyDatasetStats, MonthlyKpi, YearlyAggregate
from usage_stats.repositories.usage_session_repository import UsageSessionRepository

logger = logging.getLogger(__name__)


class AggregationService:
    """
    Read-only summaries over monthly and daily datasets.

    Parameters
    ----------
    monthly_formula:
        Override the monthly KPI formula.
    daily_formula:
        Override the daily KPI formula.
    """

    def __init__(
        self,
        *,
        monthly_formula: MonthlyUsageKPIFormula | None = None,
        daily_formula: DailyUsageKPIFormula | None = None,
    ) -> None:
        self._monthly_formula = monthly_formula or MonthlyUsageKPIFormula()
        self._daily_formula = daily_formula or DailyUsageKPIFormula()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def summarize_monthly(self, dataset: MonthlyDataset) -> MonthlyKpi:
        """
        Compute the monthly KPI record for *dataset*.

        ``latest_month`` follows upload order while ``latest_year`` follows
        year order; the two can disagree when source rows are unsorted.
        """
        result = self._monthly_formula.calculate(
            {
                "months": dataset.months,
                "menu1": dataset.menu1,
                "menu2": dataset.menu2,
                "menu3": dataset.menu3,
                "menu4": dataset.menu4,
                "unique_users": dataset.unique_users,
                "total_hits": dataset.total_hits,
            }
        )

        yearly = tuple(_to_yearly_aggregate(entry) for entry in result["yearly"])
        latest_year = yearly[-1] if yearly else None

        kpi = MonthlyKpi(
            month_count=result["month_count"],
            menu1_sum=result["menu1_sum"],
            menu2_sum=result["menu2_sum"],
            menu3_sum=result["menu3_sum"],
            menu4_sum=result["menu4_sum"],
            menu_all_sum=result["menu_all_sum"],
            user_sum=result["user_sum"],
            hit_sum=result["hit_sum"],
            menu_all_avg=result["menu_all_avg"],
            user_avg=result["user_avg"],
            hit_avg=result["hit_avg"],
            latest_month=result["latest_month"],
            latest_year=latest_year,
            yearly=yearly,
        )

        if latest_year is not None and not kpi.latest_month.startswith(latest_year.year):
            logger.info(
                "Latest month %r (upload order) is outside latest year %r",
                kpi.latest_month,
                latest_year.year,
            )
        logger.debug(
            "summarize_monthly months=%d hit_sum=%s years=%d",
            kpi.month_count,
            kpi.hit_sum,
            len(yearly),
        )
        return kpi

    def summarize_daily(self, dataset: DailyDataset) -> DailyDatasetStats:
        """
        Compute avg / max / min / date range for one daily dataset.
        """
        result = self._daily_formula.calculate(
            {"dates": dataset.dates, "users": dataset.users}
        )
        stats = DailyDatasetStats(
            dataset_id=dataset.dataset_id,
            file_name=dataset.file_name,
            avg=result["avg"],
            max=result["max"],
            min=result["min"],
            start_date=result["start_date"],
            end_date=result["end_date"],
            days=result["days"],
        )
        logger.debug(
            "summarize_daily id=%s days=%d avg=%d", stats.dataset_id, stats.days, stats.avg
        )
        return stats

    def summarize_daily_collection(
        self,
        datasets: Iterable[DailyDataset],
    ) -> list[DailyDatasetStats]:
        """Summaries for each dataset, in the given order."""
        return [self.summarize_daily(dataset) for dataset in datasets]

    def snapshot(
        self,
        session: UsageSessionRepository,
    ) -> tuple[MonthlyKpi | None, list[DailyDatasetStats]]:
        """
        Current monthly KPI (None without a monthly dataset) and the stats of
        every daily dataset in upload order.
        """
        monthly = session.monthly_dataset
        monthly_kpi = self.summarize_monthly(monthly) if monthly is not None else None
        return monthly_kpi, self.summarize_daily_collection(session.list_daily())


def _to_yearly_aggregate(entry: dict[str, Any]) -> YearlyAggregate:
    return YearlyAggregate(
        year=entry["year"],
        count=entry["count"],
        menu1_sum=entry["menu1_sum"],
        menu2_sum=entry["menu2_sum"],
        menu3_sum=entry["menu3_sum"],
        menu4_sum=entry["menu4_sum"],
        menu_all_sum=entry["menu_all_sum"],
        user_sum=entry["user_sum"],
        hit_sum=entry["hit_sum"],
        menu1_avg=entry["menu1_avg"],
        menu2_avg=entry["menu2_avg"],
        menu3_avg=entry["menu3_avg"],
        menu4_avg=entry["menu4_avg"],
        menu_all_avg=entry["menu_all_avg"],
        user_avg=entry["user_avg"],
        hit_avg=entry["hit_avg"],
    )
