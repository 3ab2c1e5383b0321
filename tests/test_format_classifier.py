from __future__ import annotations

import unittest
from datetime import datetime

from usage_stats.domain.usage_dataset import FileKind
from usage_stats.validators.format_classifier import (
    ClassificationRule,
    FormatClassifier,
    classify_grid,
    has_daily_column_count,
    has_monthly_column_count,
    header_names_date,
    header_names_month,
)

MONTHLY_HEADER = ["Month", "Menu1", "Menu2", "Menu3", "Menu4", "Users", "Total"]


class TestFormatClassifier(unittest.TestCase):
    def setUp(self) -> None:
        self.classifier = FormatClassifier()

    def test_month_header_is_monthly(self) -> None:
        grid = [MONTHLY_HEADER, ["2024-01", 1, 2, 3, 4, 5, 6]]
        self.assertEqual(self.classifier.classify(grid), FileKind.MONTHLY)

    def test_date_header_is_daily(self) -> None:
        grid = [["Date", "Users"], ["2024-01-01", 10]]
        self.assertEqual(self.classifier.classify(grid), FileKind.DAILY_USERS)

    def test_unrelated_two_column_text_is_unknown(self) -> None:
        grid = [["A", "B"], ["x", "y"]]
        self.assertEqual(self.classifier.classify(grid), FileKind.UNKNOWN)

    def test_header_match_is_case_insensitive(self) -> None:
        self.assertEqual(classify_grid([["REPORT MONTH"], [None]]), FileKind.MONTHLY)
        self.assertEqual(classify_grid([["Visit DATE"], [None]]), FileKind.DAILY_USERS)

    def test_korean_header_terms(self) -> None:
        self.assertEqual(classify_grid([["월", "메뉴1"], ["2024-01", 1]]), FileKind.MONTHLY)
        self.assertEqual(classify_grid([["일자", "사용자"], ["2024-01-01", 1]]), FileKind.DAILY_USERS)

    def test_header_text_wins_over_column_count(self) -> None:
        grid = [["Month", "Users"], ["2024-01-01", 10]]
        self.assertEqual(self.classifier.classify(grid), FileKind.MONTHLY)

    def test_five_populated_columns_without_header_is_monthly(self) -> None:
        grid = [
            ["2024-01", 1, 2, 3, 4, 5, 6],
            ["2024-02", 1, 2, 3, 4, None, ""],
        ]
        self.assertEqual(self.classifier.classify(grid), FileKind.MONTHLY)

    def test_two_populated_columns_with_date_is_daily(self) -> None:
        grid = [[datetime(2024, 1, 1), 3], [datetime(2024, 1, 2), 4, None]]
        self.assertEqual(self.classifier.classify(grid), FileKind.DAILY_USERS)

    def test_dotted_date_counts_as_date_for_column_rule(self) -> None:
        grid = [["2024.01.01", 3], ["2024.01.02", 4]]
        self.assertEqual(self.classifier.classify(grid), FileKind.DAILY_USERS)

    def test_three_populated_columns_is_unknown(self) -> None:
        grid = [["a", "b", "c"], ["2024-01-01", 1, 2]]
        self.assertEqual(self.classifier.classify(grid), FileKind.UNKNOWN)

    def test_fewer_than_two_rows_is_unknown(self) -> None:
        self.assertEqual(self.classifier.classify([MONTHLY_HEADER]), FileKind.UNKNOWN)
        self.assertEqual(self.classifier.classify([]), FileKind.UNKNOWN)

    def test_non_text_header_falls_through_to_column_count(self) -> None:
        grid = [[None, None], [None, None]]
        self.assertEqual(self.classifier.classify(grid), FileKind.UNKNOWN)

    def test_missing_second_row_is_handled(self) -> None:
        grid = [["x"], None]
        self.assertEqual(self.classifier.classify(grid), FileKind.UNKNOWN)

    def test_predicates_are_independent(self) -> None:
        grid = [["Month"], ["2024-01-01", 5]]
        self.assertTrue(header_names_month(grid))
        self.assertFalse(header_names_date(grid))
        self.assertFalse(has_monthly_column_count(grid))
        self.assertTrue(has_daily_column_count(grid))

    def test_custom_rules_are_evaluated_in_order(self) -> None:
        classifier = FormatClassifier(
            rules=[
                ClassificationRule("always_daily", FileKind.DAILY_USERS, lambda grid: True),
                ClassificationRule("always_monthly", FileKind.MONTHLY, lambda grid: True),
            ]
        )
        self.assertEqual(classifier.classify([["a"], ["b"]]), FileKind.DAILY_USERS)


if __name__ == "__main__":
    unittest.main()
