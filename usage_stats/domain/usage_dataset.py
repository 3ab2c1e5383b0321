"""
usage_stats/domain/usage_dataset.py

Typed datasets produced from raw spreadsheet grids.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Sequence, TypeVar

RawGrid = Sequence[Sequence[Any] | None]
"""Decoded sheet: rows of mixed cell values, unused cells filled with None."""

T = TypeVar("T")

DEFAULT_MENU_LABELS: tuple[str, str, str, str] = ("Menu1", "Menu2", "Menu3", "Menu4")


class FileKind(str, Enum):
    """Known table shapes an uploaded grid can be classified as."""

    MONTHLY = "monthly"
    DAILY_USERS = "dailyUsers"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class MenuLabels:
    """
    Display names for the four menu counters.
    """

    menu1: str = DEFAULT_MENU_LABELS[0]
    menu2: str = DEFAULT_MENU_LABELS[1]
    menu3: str = DEFAULT_MENU_LABELS[2]
    menu4: str = DEFAULT_MENU_LABELS[3]

    def as_dict(self) -> dict[str, str]:
        return {
            "menu1": self.menu1,
            "menu2": self.menu2,
            "menu3": self.menu3,
            "menu4": self.menu4,
        }


@dataclass(frozen=True)
class MonthlyRecord:
    """
    One canonical monthly row.
    """

    month: str
    menu1: float
    menu2: float
    menu3: float
    menu4: float
    unique_users: float
    total_hits: float


@dataclass(frozen=True)
class MonthlyDataset:
    """
    Monthly records in source row order plus resolved menu labels.

    Construction fails on an empty record sequence.
    """

    records: tuple[MonthlyRecord, ...]
    menu_labels: MenuLabels = field(default_factory=MenuLabels)

    def __post_init__(self) -> None:
        if not self.records:
            raise ValueError("MonthlyDataset requires at least one record.")
        object.__setattr__(self, "records", tuple(self.records))

    def __len__(self) -> int:
        return len(self.records)

    # Columnar views consumed by chart collaborators.

    @property
    def months(self) -> list[str]:
        return [record.month for record in self.records]

    @property
    def menu1(self) -> list[float]:
        return [record.menu1 for record in self.records]

    @property
    def menu2(self) -> list[float]:
        return [record.menu2 for record in self.records]

    @property
    def menu3(self) -> list[float]:
        return [record.menu3 for record in self.records]

    @property
    def menu4(self) -> list[float]:
        return [record.menu4 for record in self.records]

    @property
    def unique_users(self) -> list[float]:
        return [record.unique_users for record in self.records]

    @property
    def total_hits(self) -> list[float]:
        return [record.total_hits for record in self.records]


@dataclass(frozen=True)
class DailyRecord:
    """
    One canonical daily row.
    """

    date: str
    users: float


@dataclass(frozen=True)
class DailyDataset:
    """
    Daily records from one uploaded file, sorted ascending by date.

    Datasets are independent of each other; ``dataset_id`` is the only
    handle used to look one up or remove it.
    """

    dataset_id: str
    file_name: str
    records: tuple[DailyRecord, ...]

    def __post_init__(self) -> None:
        if not self.records:
            raise ValueError("DailyDataset requires at least one record.")
        ordered = tuple(sorted(self.records, key=lambda record: record.date))
        object.__setattr__(self, "records", ordered)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def dates(self) -> list[str]:
        return [record.date for record in self.records]

    @property
    def users(self) -> list[float]:
        return [record.users for record in self.records]


@dataclass(frozen=True)
class SkippedRow:
    """
    One data row dropped during parsing.
    """

    row_number: int
    message: str
    value: str | None = None


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """
    Successful parse: the typed payload plus an audit of dropped rows.

    ``rows_skipped`` is exact; ``skipped_rows`` may be capped by settings.
    """

    payload: T
    rows_accepted: int
    rows_skipped: int = 0
    skipped_rows: tuple[SkippedRow, ...] = ()
