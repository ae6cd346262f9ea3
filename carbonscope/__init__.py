"""
CarbonScope: Greenhouse Gas Emissions Calculator
================================================

Scope 1, 2 and 3 emissions from activity data, offset pricing and scenario
comparison.

Example:
    >>> from carbonscope import Scope1Activity, Scope2Activity, Scope3Activity, compute_total
    >>> result = compute_total(Scope1Activity(natural_gas=1000), Scope2Activity(), Scope3Activity())
    >>> result.total_emissions
    2.0
"""

from ._version import __version__

from carbonscope.calculation import (
    DEFAULT_EMISSION_FACTORS,
    ActivityData,
    CalculationResult,
    EmissionFactorTable,
    Scope,
    Scope1Activity,
    Scope2Activity,
    Scope3Activity,
    compute_scope,
    compute_total,
    load_factor_table,
    offset_cost,
    reduction_percentage,
)
from carbonscope.exceptions import (
    CarbonScopeException,
    MissingFactorError,
    NonFiniteInputError,
)

__all__ = [
    "__version__",
    "DEFAULT_EMISSION_FACTORS",
    "ActivityData",
    "CalculationResult",
    "EmissionFactorTable",
    "Scope",
    "Scope1Activity",
    "Scope2Activity",
    "Scope3Activity",
    "compute_scope",
    "compute_total",
    "load_factor_table",
    "offset_cost",
    "reduction_percentage",
    "CarbonScopeException",
    "MissingFactorError",
    "NonFiniteInputError",
]
