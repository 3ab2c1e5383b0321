"""
tests/test_cell_normalizer.py

Pytest unit tests for the cell normalizers.

All tests are pure Python: no files, no I/O.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from usage_stats.validators.cell_normalizer import normalize_date, normalize_month, to_number


# ---------------------------------------------------------------------------
# normalize_month
# ---------------------------------------------------------------------------


class TestNormalizeMonth:
    def test_datetime_uses_calendar_year_and_month(self) -> None:
        assert normalize_month(datetime(2024, 3, 15, 9, 30)) == "2024-03"

    def test_date_is_zero_padded(self) -> None:
        assert normalize_month(date(2023, 1, 1)) == "2023-01"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2024-03", "2024-03"),
            ("  2024-03  ", "2024-03"),
            ("2024-03-31", "2024-03"),
        ],
    )
    def test_canonical_text_is_truncated(self, raw: str, expected: str) -> None:
        assert normalize_month(raw) == expected

    def test_other_text_is_lowercased_passthrough(self) -> None:
        assert normalize_month("  Jan 2024 ") == "jan 2024"

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_input_returns_empty_string(self, raw: object) -> None:
        assert normalize_month(raw) == ""

    def test_nan_counts_as_empty(self) -> None:
        assert normalize_month(float("nan")) == ""

    @pytest.mark.parametrize(
        "raw",
        ["2024-03", "2024-03-09", datetime(2022, 12, 5), "March", " 2021/07 "],
    )
    def test_is_idempotent(self, raw: object) -> None:
        once = normalize_month(raw)
        assert normalize_month(once) == once


# ---------------------------------------------------------------------------
# normalize_date
# ---------------------------------------------------------------------------


class TestNormalizeDate:
    def test_dot_and_slash_separators_are_equivalent(self) -> None:
        assert normalize_date("2024.03.05") == normalize_date("2024/03/05") == "2024-03-05"

    def test_canonical_text_is_returned_as_is(self) -> None:
        assert normalize_date("2024-03-05") == "2024-03-05"

    def test_datetime_uses_calendar_fields(self) -> None:
        assert normalize_date(datetime(2024, 2, 9, 23, 59)) == "2024-02-09"

    def test_date_is_zero_padded(self) -> None:
        assert normalize_date(date(2024, 1, 2)) == "2024-01-02"

    def test_unrecognized_text_is_trimmed_passthrough(self) -> None:
        assert normalize_date("  5 March 2024 ") == "5 March 2024"

    def test_unpadded_text_is_not_rewritten_into_canonical_form(self) -> None:
        assert normalize_date("2024/3/5") == "2024/3/5"

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_input_returns_empty_string(self, raw: object) -> None:
        assert normalize_date(raw) == ""

    def test_integral_float_is_rendered_without_fraction(self) -> None:
        assert normalize_date(45000.0) == "45000"


# ---------------------------------------------------------------------------
# to_number
# ---------------------------------------------------------------------------


class TestToNumber:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1,234", 1234),
            ("", 0),
            ("abc", 0),
            (42, 42),
            (None, 0),
            (" 12.5 ", 12.5),
            ("1,234.5", 1234.5),
            ("-7", -7),
        ],
    )
    def test_coercion(self, raw: object, expected: float) -> None:
        assert to_number(raw) == expected

    def test_numbers_pass_through_without_clamping(self) -> None:
        assert to_number(-3.25) == -3.25

    def test_thousands_text_parses_to_int(self) -> None:
        assert isinstance(to_number("1,234"), int)

    def test_decimal_becomes_float(self) -> None:
        assert to_number(Decimal("2.5")) == pytest.approx(2.5)

    @pytest.mark.parametrize("raw", [True, False, float("nan"), float("inf"), "nan", "Infinity"])
    def test_non_numeric_or_non_finite_values_become_zero(self, raw: object) -> None:
        assert to_number(raw) == 0

    def test_whitespace_only_text_is_zero(self) -> None:
        assert to_number("   ") == 0
