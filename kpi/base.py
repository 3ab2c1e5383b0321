"""
kpi/base.py

Abstract base class and shared arithmetic for usage KPI formulas.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from typing import Any


class BaseKPIFormula(ABC):
    """
    Contract for KPI formula implementations.

    Subclasses receive a plain dictionary of pre-parsed numerical inputs
    and must return a plain dictionary of computed metric values.

    No I/O, no logging, and no side effects are permitted inside
    :meth:`calculate`.
    """

    @abstractmethod
    def calculate(self, inputs: dict[str, Any]) -> dict[str, Any]:
        """
        Compute KPI metrics from *inputs* and return a result dictionary.

        Parameters
        ----------
        inputs:
            Metric series keyed by metric name.

        Returns
        -------
        dict[str, Any]
            Computed metrics keyed by metric name.
        """


def round_half_away(value: float) -> int:
    """
    Round to the nearest integer with ties away from zero (2.5 -> 3, -2.5 -> -3).
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def safe_average(total: float, count: int) -> int:
    """
    Rounded ``total / count``; 0 when ``count`` is zero.
    """
    if count <= 0:
        return 0
    return round_half_away(total / count)
