"""
CarbonScope Emissions Calculation Engine

This module provides deterministic, reproducible calculations of greenhouse
gas emissions across Scopes 1, 2, and 3.

Key Guarantees:
- 100% DETERMINISTIC: Same input -> Same output (fixed summation order)
- PURE: No I/O, no logging, no mutation of caller inputs
- FAIL LOUD: Missing factors and NaN/inf inputs raise, never propagate

Components:
- Scope1Activity / Scope2Activity / Scope3Activity: closed activity records
- EmissionFactorTable: kg CO2e per unit for every category
- compute_scope / compute_total: the emissions engine
- offset_cost / reduction_percentage: derived metrics
"""

from carbonscope.calculation.categories import (
    CATEGORIES,
    Category,
    Scope,
    categories_for,
    get_category,
)

from carbonscope.calculation.activity import (
    ActivityData,
    ActivityRecord,
    Scope1Activity,
    Scope2Activity,
    Scope3Activity,
)

from carbonscope.calculation.factors import (
    DEFAULT_EMISSION_FACTORS,
    EmissionFactorTable,
    load_factor_table,
)

from carbonscope.calculation.engine import (
    KG_PER_TONNE,
    CalculationResult,
    ScopeResult,
    compute_activity,
    compute_scope,
    compute_total,
)

from carbonscope.calculation.metrics import (
    breakdown_shares,
    category_shares,
    offset_cost,
    reduction_percentage,
)

__all__ = [
    # Categories
    "CATEGORIES",
    "Category",
    "Scope",
    "categories_for",
    "get_category",
    # Activity records
    "ActivityData",
    "ActivityRecord",
    "Scope1Activity",
    "Scope2Activity",
    "Scope3Activity",
    # Factors
    "DEFAULT_EMISSION_FACTORS",
    "EmissionFactorTable",
    "load_factor_table",
    # Engine
    "KG_PER_TONNE",
    "CalculationResult",
    "ScopeResult",
    "compute_activity",
    "compute_scope",
    "compute_total",
    # Derived metrics
    "breakdown_shares",
    "category_shares",
    "offset_cost",
    "reduction_percentage",
]
