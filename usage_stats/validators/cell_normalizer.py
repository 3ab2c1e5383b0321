"""
usage_stats/validators/cell_normalizer.py

Cell-level coercion of heterogeneous spreadsheet values.

Workbook decoders hand over real date objects for date-formatted cells and
free text for everything else, so every helper here accepts both. None of
them raise: unusable input produces a sentinel (``""`` or ``0``) that the
row-level parsers treat as "skip this row" or "count as zero".
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

CANONICAL_MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")
CANONICAL_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_MONTH_OR_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}(-\d{2})?$")
_DATE_SEPARATORS = re.compile(r"[./]")


def is_blank(value: Any) -> bool:
    """
    Return True for None, NaN and empty text.
    """

    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


def cell_to_text(value: Any) -> str:
    """
    Render a non-date cell as text; integral floats drop their ``.0``.
    """

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_month(value: Any) -> str:
    """
    Coerce a cell to a ``YYYY-MM`` month label.

    Dates use their calendar year and month. Text is lowercased and trimmed;
    ``YYYY-MM`` and ``YYYY-MM-DD`` are truncated to seven characters and
    anything else is passed through as-is.
    """

    if is_blank(value):
        return ""

    if isinstance(value, (datetime, date)):
        return f"{value.year:04d}-{value.month:02d}"

    raw = cell_to_text(value).lower().strip()
    if _MONTH_OR_DATE_PATTERN.match(raw):
        return raw[:7]
    return raw


def normalize_date(value: Any) -> str:
    """
    Coerce a cell to a ``YYYY-MM-DD`` date label.

    ``.`` and ``/`` separators are rewritten to ``-``. Text that still does
    not look like a date comes back trimmed but otherwise unchanged.
    """

    if is_blank(value):
        return ""

    if isinstance(value, (datetime, date)):
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"

    raw = cell_to_text(value).strip()
    if CANONICAL_DATE_PATTERN.match(raw):
        return raw

    replaced = _DATE_SEPARATORS.sub("-", raw)
    if CANONICAL_DATE_PATTERN.match(replaced):
        return replaced

    return raw


def to_number(value: Any) -> int | float:
    """
    Coerce a cell to a number, falling back to ``0``.

    Numbers pass through unchanged. Text has thousands-separator commas
    removed before parsing. Booleans, unparseable text and non-finite
    results all become ``0``.
    """

    if is_blank(value) or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    if isinstance(value, Decimal):
        return float(value) if value.is_finite() else 0

    cleaned = str(value).replace(",", "").strip()
    if not cleaned:
        return 0

    try:
        return int(cleaned)
    except ValueError:
        pass

    try:
        parsed = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return 0
    if not parsed.is_finite():
        return 0
    return float(parsed)
