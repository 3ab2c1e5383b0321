"""
usage_stats/readers/grid_reader.py

Decodes uploaded spreadsheet bytes into a RawGrid.

Only the first sheet of a workbook is read and no header row is assumed;
deciding what row 0 means is left to the classifier and parsers.
"""

from __future__ import annotations

import csv
import io
import logging
import math
import zipfile
from pathlib import PurePath
from typing import Any

import numpy as np
import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from usage_stats.config import get_grid_reader_settings
from usage_stats.domain.errors import GridDecodeError

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = {".xlsx", ".xlsm"}
CSV_EXTENSIONS = {".csv"}
SUPPORTED_EXTENSIONS = EXCEL_EXTENSIONS | CSV_EXTENSIONS


def _to_cell(value: Any) -> Any:
    """
    Convert one pandas cell into a plain Python value, None for absent cells.
    """

    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.datetime64):
        return None if np.isnat(value) else pd.Timestamp(value).to_pydatetime()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, str) and value == "":
        return None
    return value


def csv_width(text: str) -> int:
    """Widest row in ``text``, 0 when there are no fields at all."""
    return max((len(row) for row in csv.reader(io.StringIO(text))), default=0)


def frame_to_grid(frame: pd.DataFrame, *, drop_blank_rows: bool = True) -> list[list[Any]]:
    """
    Turn a header-less DataFrame into a list of row lists.
    """

    grid: list[list[Any]] = []
    for raw_row in frame.itertuples(index=False, name=None):
        row = [_to_cell(value) for value in raw_row]
        if drop_blank_rows and all(cell is None for cell in row):
            continue
        grid.append(row)
    return grid


class GridReader:
    """
    Reads `.xlsx` and `.csv` payloads with pandas.
    """

    def __init__(self, *, max_file_bytes: int | None = None, drop_blank_rows: bool | None = None) -> None:
        settings = get_grid_reader_settings()
        self._max_file_bytes = max_file_bytes if max_file_bytes is not None else settings.max_file_bytes
        self._drop_blank_rows = (
            drop_blank_rows if drop_blank_rows is not None else settings.drop_blank_rows
        )

    def read(self, data: bytes, file_name: str) -> list[list[Any]]:
        """
        Decode ``data`` into a grid based on the extension of ``file_name``.

        Raises GridDecodeError for unsupported, oversize or unreadable files.
        """

        extension = PurePath(file_name or "").suffix.lower()
        if extension not in SUPPORTED_EXTENSIONS:
            allowed = ", ".join(sorted(SUPPORTED_EXTENSIONS))
            raise GridDecodeError(f"Unsupported file type {extension!r}. Allowed: {allowed}.")
        if len(data) > self._max_file_bytes:
            raise GridDecodeError(
                f"File is {len(data)} bytes; the limit is {self._max_file_bytes} bytes."
            )
        if not data:
            return []

        try:
            if extension in EXCEL_EXTENSIONS:
                frame = pd.read_excel(
                    io.BytesIO(data),
                    sheet_name=0,
                    header=None,
                    engine="openpyxl",
                )
            else:
                text = data.decode("utf-8-sig")
                # Rows may differ in length; size the frame by the widest one.
                width = csv_width(text)
                if width == 0:
                    return []
                frame = pd.read_csv(
                    io.StringIO(text),
                    header=None,
                    names=list(range(width)),
                    dtype=str,
                    keep_default_na=False,
                    skip_blank_lines=False,
                )
        except pd.errors.EmptyDataError:
            return []
        except UnicodeDecodeError as exc:
            raise GridDecodeError("CSV must be UTF-8 encoded.") from exc
        except (
            ValueError,
            OSError,
            csv.Error,
            zipfile.BadZipFile,
            InvalidFileException,
            pd.errors.ParserError,
        ) as exc:
            raise GridDecodeError(f"Could not read spreadsheet {file_name!r}: {exc}") from exc

        grid = frame_to_grid(frame, drop_blank_rows=self._drop_blank_rows)
        logger.debug("Decoded %r into %d rows", file_name, len(grid))
        return grid


def read_grid(data: bytes, file_name: str) -> list[list[Any]]:
    """Decode ``data`` with default settings."""
    return GridReader().read(data, file_name)
