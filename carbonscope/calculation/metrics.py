# -*- coding: utf-8 -*-
"""
Derived Metrics

Small computations layered on engine output:
- offset_cost: price of offsetting an emissions amount
- reduction_percentage: signed change of a scenario against a baseline
- breakdown_shares / category_shares: percentage splits shown in charts
"""

from typing import Dict, Union

from carbonscope.calculation.categories import Scope
from carbonscope.calculation.engine import CalculationResult


def offset_cost(amount: float, price_per_unit: float) -> float:
    """
    Cost of offsetting ``amount`` (tCO2e) at ``price_per_unit`` per tonne.

    No bounds checks: a negative amount gives a negative cost.

    Example:
        >>> offset_cost(10, 15)
        150
    """
    return amount * price_per_unit


def reduction_percentage(baseline: float, current: float) -> float:
    """
    Relative reduction of ``current`` against ``baseline``, in percent.

    Positive means ``current`` is lower than ``baseline`` (a reduction),
    negative means an increase. A zero baseline returns 0.

    Example:
        >>> reduction_percentage(100, 60)
        40.0
        >>> reduction_percentage(100, 150)
        -50.0
    """
    if baseline == 0:
        return 0
    return (baseline - current) / baseline * 100


def _share(part: float, whole: float) -> float:
    if whole == 0:
        return 0.0
    return part / whole * 100


def breakdown_shares(result: CalculationResult) -> Dict[str, float]:
    """Share of the grand total per scope, in percent"""
    return {
        scope.value: _share(result.scope_total(scope), result.total_emissions)
        for scope in Scope
    }


def category_shares(result: CalculationResult, scope: Union[Scope, str]) -> Dict[str, float]:
    """Share of each category within its scope total, in percent"""
    scope = Scope(scope)
    total = result.scope_total(scope)
    return {
        name: _share(value, total)
        for name, value in result.breakdown[scope.value].items()
    }
