from __future__ import annotations

import unittest

from usage_stats.domain.usage_dataset import DailyDataset, DailyRecord, MonthlyDataset, MonthlyRecord
from usage_stats.repositories.usage_session_repository import UsageSessionRepository


def _daily(dataset_id: str) -> DailyDataset:
    return DailyDataset(
        dataset_id=dataset_id,
        file_name=f"{dataset_id}.csv",
        records=(DailyRecord("2024-01-01", 1),),
    )


def _monthly() -> MonthlyDataset:
    return MonthlyDataset(records=(MonthlyRecord("2024-01", 1, 2, 3, 4, 5, 6),))


class TestUsageSessionRepository(unittest.TestCase):
    def setUp(self) -> None:
        self.repository = UsageSessionRepository()

    def test_starts_empty(self) -> None:
        self.assertIsNone(self.repository.monthly_dataset)
        self.assertIsNone(self.repository.monthly_file_name)
        self.assertEqual(self.repository.list_daily(), [])

    def test_daily_datasets_keep_upload_order(self) -> None:
        for dataset_id in ("c", "a", "b"):
            self.repository.add_daily(_daily(dataset_id))

        ids = [dataset.dataset_id for dataset in self.repository.list_daily()]
        self.assertEqual(ids, ["c", "a", "b"])

    def test_duplicate_id_is_rejected(self) -> None:
        self.repository.add_daily(_daily("a"))
        with self.assertRaises(ValueError):
            self.repository.add_daily(_daily("a"))

    def test_remove_unknown_id_is_noop(self) -> None:
        self.repository.add_daily(_daily("a"))
        self.assertFalse(self.repository.remove_daily("missing"))
        self.assertEqual(len(self.repository.list_daily()), 1)

    def test_remove_only_touches_target(self) -> None:
        self.repository.add_daily(_daily("a"))
        self.repository.add_daily(_daily("b"))

        self.assertTrue(self.repository.remove_daily("a"))
        self.assertIsNone(self.repository.get_daily("a"))
        self.assertIsNotNone(self.repository.get_daily("b"))

    def test_list_is_a_copy(self) -> None:
        self.repository.add_daily(_daily("a"))
        listed = self.repository.list_daily()
        listed.clear()
        self.assertEqual(len(self.repository.list_daily()), 1)

    def test_clear_monthly(self) -> None:
        self.repository.replace_monthly(_monthly(), "m.xlsx")
        self.repository.clear_monthly()
        self.assertIsNone(self.repository.monthly_dataset)
        self.assertIsNone(self.repository.monthly_file_name)

    def test_reset_clears_everything(self) -> None:
        self.repository.replace_monthly(_monthly(), "m.xlsx")
        self.repository.add_daily(_daily("a"))

        self.repository.reset()

        self.assertIsNone(self.repository.monthly_dataset)
        self.assertEqual(self.repository.list_daily(), [])


if __name__ == "__main__":
    unittest.main()
