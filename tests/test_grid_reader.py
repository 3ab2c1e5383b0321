"""
tests/test_grid_reader.py

Pytest tests for decoding spreadsheet bytes into grids.
"""

from __future__ import annotations

import io
from datetime import datetime

import numpy as np
import pandas as pd
import pytest
from openpyxl import Workbook

from usage_stats.domain.errors import GridDecodeError
from usage_stats.readers.grid_reader import GridReader, frame_to_grid


def _xlsx_bytes(rows: list[list[object]]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture()
def reader() -> GridReader:
    return GridReader(max_file_bytes=1024 * 1024, drop_blank_rows=True)


class TestFrameToGrid:
    def test_missing_values_become_none(self) -> None:
        frame = pd.DataFrame([["a", np.nan], [pd.NaT, 3]])
        assert frame_to_grid(frame) == [["a", None], [None, 3]]

    def test_numpy_scalars_become_native(self) -> None:
        frame = pd.DataFrame([[np.int64(7), np.float64(1.5)]])
        grid = frame_to_grid(frame)
        assert grid == [[7, 1.5]]
        assert type(grid[0][0]) is int

    def test_blank_rows_are_dropped_on_request(self) -> None:
        frame = pd.DataFrame([["a", 1], [None, None], ["b", 2]])
        assert len(frame_to_grid(frame, drop_blank_rows=True)) == 2
        assert len(frame_to_grid(frame, drop_blank_rows=False)) == 3

    def test_timestamps_become_datetimes(self) -> None:
        frame = pd.DataFrame({"d": pd.to_datetime(["2024-01-05"])})
        cell = frame_to_grid(frame)[0][0]
        assert isinstance(cell, datetime)
        assert not isinstance(cell, pd.Timestamp)


class TestGridReader:
    def test_csv_cells_stay_text(self, reader: GridReader) -> None:
        data = b"Date,Users\n2024-01-02,5\n2024-01-01,\n"
        grid = reader.read(data, "daily.csv")

        assert grid == [["Date", "Users"], ["2024-01-02", "5"], ["2024-01-01", None]]

    def test_csv_with_bom_header(self, reader: GridReader) -> None:
        data = "\ufeffMonth,A\n2024-01,1\n".encode("utf-8")
        assert reader.read(data, "m.CSV")[0][0] == "Month"

    def test_xlsx_first_sheet_keeps_dates(self, reader: GridReader) -> None:
        data = _xlsx_bytes(
            [
                ["Month", "Menu1"],
                [datetime(2024, 1, 1), 10],
                [datetime(2024, 2, 1), None],
            ]
        )
        grid = reader.read(data, "monthly.xlsx")

        assert grid[0] == ["Month", "Menu1"]
        assert grid[1][0] == datetime(2024, 1, 1)
        assert grid[1][1] == 10
        assert grid[2][1] is None

    def test_csv_title_line_before_wider_table(self, reader: GridReader) -> None:
        data = b"Usage report\nMonth,A,B,C,D,Users,Total\n2024-01,1,2,3,4,5,6\n"
        grid = reader.read(data, "monthly.csv")

        assert grid[0] == ["Usage report"] + [None] * 6
        assert grid[1] == ["Month", "A", "B", "C", "D", "Users", "Total"]
        assert grid[2] == ["2024-01", "1", "2", "3", "4", "5", "6"]

    def test_csv_row_longer_than_header(self, reader: GridReader) -> None:
        data = b"Date,Users\n2024-01-01,5\n2024-01-02,6,extra\n"
        grid = reader.read(data, "daily.csv")

        assert grid == [
            ["Date", "Users", None],
            ["2024-01-01", "5", None],
            ["2024-01-02", "6", "extra"],
        ]

    def test_empty_payload_is_empty_grid(self, reader: GridReader) -> None:
        assert reader.read(b"", "empty.csv") == []

    def test_unsupported_extension(self, reader: GridReader) -> None:
        with pytest.raises(GridDecodeError):
            reader.read(b"x", "report.pdf")

    def test_oversize_payload(self) -> None:
        small = GridReader(max_file_bytes=4, drop_blank_rows=True)
        with pytest.raises(GridDecodeError):
            small.read(b"Date,Users\n", "daily.csv")

    def test_corrupt_workbook(self, reader: GridReader) -> None:
        with pytest.raises(GridDecodeError):
            reader.read(b"not really a zip archive", "broken.xlsx")
