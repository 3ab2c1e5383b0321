"""
usage_stats/repositories/usage_session_repository.py

In-memory state for one dashboard session.

Holds the single active monthly dataset and the ordered collection of
daily datasets. The composition root owns one instance and passes it to
the services that read or mutate it.
"""

from __future__ import annotations

import logging

from usage_stats.domain.usage_dataset import DailyDataset, MonthlyDataset

logger = logging.getLogger(__name__)


class UsageSessionRepository:
    """
    Session-scoped store of uploaded datasets.

    Stored datasets are frozen; the repository only swaps the monthly
    dataset wholesale and appends or removes daily datasets by id.
    """

    def __init__(self) -> None:
        self._monthly: MonthlyDataset | None = None
        self._monthly_file_name: str | None = None
        self._daily: dict[str, DailyDataset] = {}

    # ------------------------------------------------------------------
    # Monthly
    # ------------------------------------------------------------------

    @property
    def monthly_dataset(self) -> MonthlyDataset | None:
        return self._monthly

    @property
    def monthly_file_name(self) -> str | None:
        return self._monthly_file_name

    def replace_monthly(self, dataset: MonthlyDataset, file_name: str) -> None:
        if self._monthly is not None:
            logger.info(
                "Replacing monthly dataset from %r with %r", self._monthly_file_name, file_name
            )
        self._monthly = dataset
        self._monthly_file_name = file_name

    def clear_monthly(self) -> None:
        self._monthly = None
        self._monthly_file_name = None

    # ------------------------------------------------------------------
    # Daily
    # ------------------------------------------------------------------

    def add_daily(self, dataset: DailyDataset) -> str:
        """
        Append ``dataset`` and return its id.

        Raises ValueError when a dataset with the same id is already stored.
        """

        if dataset.dataset_id in self._daily:
            raise ValueError(f"Daily dataset already exists: {dataset.dataset_id}")
        self._daily[dataset.dataset_id] = dataset
        return dataset.dataset_id

    def get_daily(self, dataset_id: str) -> DailyDataset | None:
        return self._daily.get(dataset_id)

    def list_daily(self) -> list[DailyDataset]:
        """Daily datasets in upload order."""
        return list(self._daily.values())

    def remove_daily(self, dataset_id: str) -> bool:
        """
        Remove one daily dataset. Returns False when the id is unknown.
        """

        removed = self._daily.pop(dataset_id, None)
        if removed is None:
            logger.debug("remove_daily: unknown dataset id %r", dataset_id)
            return False
        logger.info("Removed daily dataset id=%s file=%r", dataset_id, removed.file_name)
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        self.clear_monthly()
        self._daily.clear()
