# -*- coding: utf-8 -*-
"""
Core Emissions Engine

DETERMINISTIC GUARANTEE:
- Pure functions: no logging, no I/O, no mutation of inputs
- Same input -> same output (fixed summation order)
- Fail loudly on NaN/infinite inputs instead of returning a poisoned total

Calculation:
    breakdown[c] = activity[c] * factor[c]            (kg CO2e)
    scope_total  = sum(breakdown) in declaration order (kg CO2e)
    both divided by 1000 once, after summation         (t CO2e)
    total_emissions = scope1 + scope2 + scope3         (t CO2e)
"""

import hashlib
import json
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from carbonscope.calculation.activity import (
    ActivityData,
    ActivityRecord,
    Scope1Activity,
    Scope2Activity,
    Scope3Activity,
)
from carbonscope.calculation.categories import Scope, get_category
from carbonscope.calculation.factors import DEFAULT_EMISSION_FACTORS, EmissionFactorTable
from carbonscope.exceptions import NonFiniteInputError, ValidationError

KG_PER_TONNE = 1000

FactorsLike = Union[EmissionFactorTable, Mapping[str, Any]]


@dataclass(frozen=True)
class ScopeResult:
    """
    Result of one scope calculation, in kg CO2e.

    Attributes:
        scope: Scope the values belong to
        total: Sum of the breakdown in declaration order
        breakdown: category -> contribution
    """
    scope: Scope
    total: float
    breakdown: Mapping[str, float]


@dataclass(frozen=True)
class CalculationResult:
    """
    Complete calculation result in tonnes CO2e.

    IMMUTABLE: breakdown mappings are read-only views.
    REPRODUCIBLE: provenance_hash is a SHA-256 of the canonical result, so
    identical inputs give identical hashes.
    """
    scope1_total: float
    scope2_total: float
    scope3_total: float
    total_emissions: float
    breakdown: Mapping[str, Mapping[str, float]]
    unit: str = "tCO2e"
    provenance_hash: str = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "provenance_hash", self._calculate_provenance_hash())

    def _calculate_provenance_hash(self) -> str:
        # repr() keeps every bit of the float, unlike str() of a rounded value
        provenance_data = {
            "scope_totals": [repr(self.scope1_total), repr(self.scope2_total), repr(self.scope3_total)],
            "total_emissions": repr(self.total_emissions),
            "breakdown": {
                scope: {name: repr(value) for name, value in values.items()}
                for scope, values in self.breakdown.items()
            },
        }
        provenance_str = json.dumps(provenance_data, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(provenance_str.encode("utf-8")).hexdigest()

    def verify_provenance(self) -> bool:
        """True if the stored hash still matches the values"""
        return self.provenance_hash == self._calculate_provenance_hash()

    def scope_total(self, scope: Union[Scope, str]) -> float:
        return getattr(self, f"{Scope(scope).value}_total")

    def to_dict(self, by_alias: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary for serialization.

        Args:
            by_alias: Use camelCase keys (scope1Total, naturalGas, ...) as
                consumed by the presentation layer
        """
        def key(name: str) -> str:
            return get_category(name).alias if by_alias else name

        breakdown = {
            scope: {key(name): value for name, value in values.items()}
            for scope, values in self.breakdown.items()
        }
        if by_alias:
            return {
                "scope1Total": self.scope1_total,
                "scope2Total": self.scope2_total,
                "scope3Total": self.scope3_total,
                "totalEmissions": self.total_emissions,
                "breakdown": breakdown,
            }
        return {
            "scope1_total": self.scope1_total,
            "scope2_total": self.scope2_total,
            "scope3_total": self.scope3_total,
            "total_emissions": self.total_emissions,
            "breakdown": breakdown,
            "unit": self.unit,
            "provenance_hash": self.provenance_hash,
        }

    def to_json(self, indent: int = 2, by_alias: bool = False) -> str:
        return json.dumps(self.to_dict(by_alias=by_alias), indent=indent)


def _resolve_factors(factors: Optional[FactorsLike]) -> EmissionFactorTable:
    if factors is None:
        return DEFAULT_EMISSION_FACTORS
    if isinstance(factors, EmissionFactorTable):
        return factors
    return EmissionFactorTable.from_mapping(factors)


def _validate(activity: ActivityRecord, factors: EmissionFactorTable) -> None:
    """Reject NaN/inf before anything is multiplied"""
    scope = activity.SCOPE.value
    for name, value in activity.values():
        if not math.isfinite(value):
            raise NonFiniteInputError(category=name, value=value, scope=scope)
        factor = factors.factor_for(name)
        if not math.isfinite(factor):
            raise NonFiniteInputError(category=name, value=factor, scope=scope, source="factor")


def _accumulate(activity: ActivityRecord, factors: EmissionFactorTable) -> ScopeResult:
    breakdown: Dict[str, float] = {}
    total = 0.0
    for name, value in activity.values():
        contribution = value * factors.factor_for(name)
        breakdown[name] = contribution
        total += contribution
    return ScopeResult(scope=activity.SCOPE, total=total, breakdown=MappingProxyType(breakdown))


def compute_scope(
    activity: ActivityRecord,
    factors: Optional[FactorsLike] = None,
) -> ScopeResult:
    """
    Compute one scope's contributions and total in kg CO2e.

    Args:
        activity: Scope1Activity, Scope2Activity or Scope3Activity
        factors: Factor table (defaults to DEFAULT_EMISSION_FACTORS)

    Returns:
        ScopeResult with per-category breakdown and total (kg CO2e)

    Raises:
        MissingFactorError: If a factor mapping omits a category
        NonFiniteInputError: If an activity value or factor is NaN/inf
    """
    table = _resolve_factors(factors)
    _validate(activity, table)
    return _accumulate(activity, table)


def _to_tonnes(result: ScopeResult) -> ScopeResult:
    return ScopeResult(
        scope=result.scope,
        total=result.total / KG_PER_TONNE,
        breakdown=MappingProxyType(
            {name: value / KG_PER_TONNE for name, value in result.breakdown.items()}
        ),
    )


def compute_total(
    scope1: Scope1Activity,
    scope2: Scope2Activity,
    scope3: Scope3Activity,
    factors: Optional[FactorsLike] = None,
) -> CalculationResult:
    """
    Compute the full emissions result in tonnes CO2e.

    All inputs are checked before any scope is computed. Each scope is then
    computed independently, converted from kg to tonnes, and the grand total
    is the sum of the three tonne totals.

    Args:
        scope1: Scope 1 activity record
        scope2: Scope 2 activity record
        scope3: Scope 3 activity record
        factors: Factor table or complete mapping (defaults to
            DEFAULT_EMISSION_FACTORS)

    Returns:
        CalculationResult

    Raises:
        MissingFactorError: If a factor mapping omits a category
        NonFiniteInputError: If an activity value or factor is NaN/inf
        ValidationError: If a record is passed in the wrong scope position

    Example:
        >>> result = compute_total(
        ...     Scope1Activity(natural_gas=1000), Scope2Activity(), Scope3Activity()
        ... )
        >>> result.scope1_total
        2.0
    """
    table = _resolve_factors(factors)
    records = (scope1, scope2, scope3)

    for expected, record in zip(Scope, records):
        if getattr(record, "SCOPE", None) != expected:
            raise ValidationError(
                message=f"Expected a {expected.label} activity record, got {type(record).__name__}",
                invalid_fields={expected.value: type(record).__name__},
            )
        _validate(record, table)

    s1, s2, s3 = (_to_tonnes(_accumulate(record, table)) for record in records)

    return CalculationResult(
        scope1_total=s1.total,
        scope2_total=s2.total,
        scope3_total=s3.total,
        total_emissions=s1.total + s2.total + s3.total,
        breakdown=MappingProxyType({
            Scope.SCOPE1.value: s1.breakdown,
            Scope.SCOPE2.value: s2.breakdown,
            Scope.SCOPE3.value: s3.breakdown,
        }),
    )


def compute_activity(
    activity: ActivityData,
    factors: Optional[FactorsLike] = None,
) -> CalculationResult:
    """``compute_total`` over an ActivityData bundle"""
    return compute_total(activity.scope1, activity.scope2, activity.scope3, factors)
