# -*- coding: utf-8 -*-
"""
Activity Category Catalogue

Closed set of activity categories grouped by GHG Protocol scope:
1. Scope 1 - direct emissions (fuels burned on site, refrigerant leaks)
2. Scope 2 - indirect emissions from purchased energy
3. Scope 3 - other value-chain emissions (travel, waste, goods, freight)

Declaration order is significant: the engine sums category contributions in
this order so repeated calculations are bit-for-bit reproducible.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Scope(str, Enum):
    """GHG Protocol reporting scope"""
    SCOPE1 = "scope1"
    SCOPE2 = "scope2"
    SCOPE3 = "scope3"

    @property
    def label(self) -> str:
        return f"Scope {self.value[-1]}"


@dataclass(frozen=True)
class Category:
    """
    One activity category.

    Attributes:
        name: snake_case identifier used in Python code and breakdowns
        alias: camelCase key used by presentation-layer payloads
        scope: Reporting scope the category belongs to
        unit: Unit of the activity quantity
        label: Human-readable name
    """
    name: str
    alias: str
    scope: Scope
    unit: str
    label: str


CATEGORIES: Tuple[Category, ...] = (
    # Scope 1
    Category("natural_gas", "naturalGas", Scope.SCOPE1, "m3", "Natural Gas"),
    Category("diesel", "diesel", Scope.SCOPE1, "L", "Diesel"),
    Category("petrol", "petrol", Scope.SCOPE1, "L", "Petrol"),
    Category("refrigerants", "refrigerants", Scope.SCOPE1, "kg", "Refrigerants"),
    Category("lpg", "lpg", Scope.SCOPE1, "kg", "LPG"),
    # Scope 2
    Category("electricity", "electricity", Scope.SCOPE2, "kWh", "Electricity"),
    Category("heating", "heating", Scope.SCOPE2, "kWh", "Heating"),
    Category("cooling", "cooling", Scope.SCOPE2, "kWh", "Cooling"),
    Category("steam", "steam", Scope.SCOPE2, "kWh", "Steam"),
    # Scope 3
    Category("business_travel", "businessTravel", Scope.SCOPE3, "km", "Business Travel"),
    Category("employee_commuting", "employeeCommuting", Scope.SCOPE3, "km", "Employee Commuting"),
    Category("waste_generated", "wasteGenerated", Scope.SCOPE3, "tonnes", "Waste Generated"),
    Category("purchased_goods", "purchasedGoods", Scope.SCOPE3, "currency", "Purchased Goods"),
    Category("upstream_transport", "upstreamTransport", Scope.SCOPE3, "tonne-km", "Upstream Transport"),
    Category("downstream_transport", "downstreamTransport", Scope.SCOPE3, "tonne-km", "Downstream Transport"),
)

_BY_KEY: Dict[str, Category] = {}
for _category in CATEGORIES:
    _BY_KEY[_category.name] = _category
    _BY_KEY[_category.alias] = _category


def categories_for(scope: Scope) -> Tuple[Category, ...]:
    """Categories of one scope, in declaration order"""
    return tuple(c for c in CATEGORIES if c.scope == Scope(scope))


def get_category(key: str) -> Category:
    """
    Look up a category by snake_case name or camelCase alias.

    Raises:
        KeyError: If the key names no category
    """
    try:
        return _BY_KEY[key]
    except KeyError:
        raise KeyError(f"Unknown activity category: {key}") from None


def category_names(scope: Scope) -> Tuple[str, ...]:
    return tuple(c.name for c in categories_for(scope))
