"""
usage_stats/schemas/usage_summary.py

Output contracts handed to the presentation layer.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from usage_stats.domain.usage_summary import DailyDatasetStats, MonthlyKpi, YearlyAggregate
from usage_stats.services.upload_service import UploadOutcome

Number = Union[int, float]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class YearlyAggregateResponse(_FrozenModel):
    """
    Per-year sums and rounded monthly averages.
    """

    year: str = Field(min_length=1)
    count: int = Field(..., ge=0)
    menu1_sum: Number
    menu2_sum: Number
    menu3_sum: Number
    menu4_sum: Number
    menu_all_sum: Number
    user_sum: Number
    hit_sum: Number
    menu1_avg: int
    menu2_avg: int
    menu3_avg: int
    menu4_avg: int
    menu_all_avg: int
    user_avg: int
    hit_avg: int

    @classmethod
    def from_domain(cls, aggregate: YearlyAggregate) -> "YearlyAggregateResponse":
        return cls(
            year=aggregate.year,
            count=aggregate.count,
            menu1_sum=aggregate.menu1_sum,
            menu2_sum=aggregate.menu2_sum,
            menu3_sum=aggregate.menu3_sum,
            menu4_sum=aggregate.menu4_sum,
            menu_all_sum=aggregate.menu_all_sum,
            user_sum=aggregate.user_sum,
            hit_sum=aggregate.hit_sum,
            menu1_avg=aggregate.menu1_avg,
            menu2_avg=aggregate.menu2_avg,
            menu3_avg=aggregate.menu3_avg,
            menu4_avg=aggregate.menu4_avg,
            menu_all_avg=aggregate.menu_all_avg,
            user_avg=aggregate.user_avg,
            hit_avg=aggregate.hit_avg,
        )


class MonthlyKpiResponse(_FrozenModel):
    """
    Headline monthly numbers plus yearly breakdown.
    """

    month_count: int = Field(..., ge=0)
    menu_labels: dict[str, str]
    menu1_sum: Number
    menu2_sum: Number
    menu3_sum: Number
    menu4_sum: Number
    menu_all_sum: Number
    user_sum: Number
    hit_sum: Number
    menu_all_avg: int
    user_avg: int
    hit_avg: int
    latest_month: str
    latest_year: Optional[YearlyAggregateResponse] = None
    yearly: list[YearlyAggregateResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, kpi: MonthlyKpi, menu_labels: dict[str, str]) -> "MonthlyKpiResponse":
        return cls(
            month_count=kpi.month_count,
            menu_labels=dict(menu_labels),
            menu1_sum=kpi.menu1_sum,
            menu2_sum=kpi.menu2_sum,
            menu3_sum=kpi.menu3_sum,
            menu4_sum=kpi.menu4_sum,
            menu_all_sum=kpi.menu_all_sum,
            user_sum=kpi.user_sum,
            hit_sum=kpi.hit_sum,
            menu_all_avg=kpi.menu_all_avg,
            user_avg=kpi.user_avg,
            hit_avg=kpi.hit_avg,
            latest_month=kpi.latest_month,
            latest_year=(
                YearlyAggregateResponse.from_domain(kpi.latest_year)
                if kpi.latest_year is not None
                else None
            ),
            yearly=[YearlyAggregateResponse.from_domain(entry) for entry in kpi.yearly],
        )


class DailyDatasetStatsResponse(_FrozenModel):
    """
    Statistics of one daily dataset.
    """

    dataset_id: str = Field(min_length=1)
    file_name: str
    avg: int
    max: Number
    min: Number
    start_date: str
    end_date: str
    days: int = Field(..., ge=0)

    @classmethod
    def from_domain(cls, stats: DailyDatasetStats) -> "DailyDatasetStatsResponse":
        return cls(
            dataset_id=stats.dataset_id,
            file_name=stats.file_name,
            avg=stats.avg,
            max=stats.max,
            min=stats.min,
            start_date=stats.start_date,
            end_date=stats.end_date,
            days=stats.days,
        )


class SkippedRowResponse(_FrozenModel):
    row_number: int = Field(..., ge=1)
    message: str
    value: Optional[str] = None


class UploadOutcomeResponse(_FrozenModel):
    """
    Result of one upload as shown to the user.
    """

    file_name: str
    status: Literal["success", "failed"]
    code: str = Field(min_length=1)
    message: str
    file_kind: Literal["monthly", "dailyUsers", "unknown"]
    dataset_id: Optional[str] = None
    rows_accepted: int = Field(..., ge=0)
    rows_skipped: int = Field(..., ge=0)
    skipped_rows: list[SkippedRowResponse] = Field(default_factory=list)
    detail: Optional[str] = None

    @classmethod
    def from_domain(cls, outcome: UploadOutcome) -> "UploadOutcomeResponse":
        return cls(
            file_name=outcome.file_name,
            status=outcome.status,
            code=outcome.code,
            message=outcome.message,
            file_kind=outcome.file_kind.value,
            dataset_id=outcome.dataset_id,
            rows_accepted=outcome.rows_accepted,
            rows_skipped=outcome.rows_skipped,
            skipped_rows=[
                SkippedRowResponse(
                    row_number=row.row_number,
                    message=row.message,
                    value=row.value,
                )
                for row in outcome.skipped_rows
            ],
            detail=outcome.detail,
        )


class UsageSessionSnapshotResponse(_FrozenModel):
    """
    Everything the dashboard renders for the current session.
    """

    monthly_file_name: Optional[str] = None
    monthly: Optional[MonthlyKpiResponse] = None
    daily: list[DailyDatasetStatsResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(
        cls,
        *,
        monthly_file_name: str | None,
        monthly_kpi: MonthlyKpi | None,
        menu_labels: dict[str, str] | None,
        daily_stats: list[DailyDatasetStats],
    ) -> "UsageSessionSnapshotResponse":
        return cls(
            monthly_file_name=monthly_file_name,
            monthly=(
                MonthlyKpiResponse.from_domain(monthly_kpi, menu_labels or {})
                if monthly_kpi is not None
                else None
            ),
            daily=[DailyDatasetStatsResponse.from_domain(stats) for stats in daily_stats],
        )
