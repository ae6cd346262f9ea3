# -*- coding: utf-8 -*-
"""
Emission Factor Table

One scalar conversion factor (kg CO2e per unit of activity) for every
activity category. ``DEFAULT_EMISSION_FACTORS`` is the built-in table, based
on GHG Protocol and EPA averages; callers may substitute an alternate table
for sensitivity analysis, either in code (``with_overrides``) or from a
YAML/JSON file (``load_factor_table``).

Custom tables built from plain mappings are checked eagerly: a missing
category raises ``MissingFactorError`` and is never treated as zero.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from carbonscope.calculation.categories import CATEGORIES, Category, get_category
from carbonscope.exceptions import (
    InvalidSchema,
    MissingData,
    MissingFactorError,
    NonFiniteInputError,
)

logger = logging.getLogger(__name__)


class EmissionFactorTable(BaseModel):
    """
    Emission factors in kg CO2e per activity unit.

    IMMUTABLE: instances are frozen; use ``with_overrides`` to derive a
    variant. Factors must be non-negative.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    # Scope 1
    natural_gas: float = Field(..., ge=0, alias="naturalGas", description="per m3")
    diesel: float = Field(..., ge=0, description="per liter")
    petrol: float = Field(..., ge=0, description="per liter")
    refrigerants: float = Field(..., ge=0, description="per kg (R-410A average)")
    lpg: float = Field(..., ge=0, description="per kg")

    # Scope 2
    electricity: float = Field(..., ge=0, description="per kWh (global grid average)")
    heating: float = Field(..., ge=0, description="per kWh (natural gas heating)")
    cooling: float = Field(..., ge=0, description="per kWh")
    steam: float = Field(..., ge=0, description="per kWh")

    # Scope 3
    business_travel: float = Field(..., ge=0, alias="businessTravel", description="per km (average car)")
    employee_commuting: float = Field(..., ge=0, alias="employeeCommuting", description="per km (mixed transport)")
    waste_generated: float = Field(..., ge=0, alias="wasteGenerated", description="per tonne (landfill)")
    purchased_goods: float = Field(..., ge=0, alias="purchasedGoods", description="per currency unit")
    upstream_transport: float = Field(..., ge=0, alias="upstreamTransport", description="per tonne-km (road freight)")
    downstream_transport: float = Field(..., ge=0, alias="downstreamTransport", description="per tonne-km (road freight)")

    def factor_for(self, category: Union[str, Category]) -> float:
        """Factor for a category name, alias or ``Category``"""
        if not isinstance(category, Category):
            category = get_category(category)
        return getattr(self, category.name)

    def items(self) -> List[Tuple[str, float]]:
        """(category, factor) pairs in declaration order"""
        return [(c.name, getattr(self, c.name)) for c in CATEGORIES]

    def with_overrides(self, **overrides: float) -> "EmissionFactorTable":
        """
        Derive a new table with some factors replaced.

        Keyword names may be snake_case names or camelCase aliases.

        Example:
            >>> greener = DEFAULT_EMISSION_FACTORS.with_overrides(electricity=0.1)
        """
        data = dict(self.items())
        for key, value in overrides.items():
            data[get_category(key).name] = value
        return EmissionFactorTable.from_mapping(data)

    def to_dict(self, by_alias: bool = False) -> Dict[str, float]:
        return self.model_dump(by_alias=by_alias)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "EmissionFactorTable":
        """
        Build a table from a plain mapping, checking completeness first.

        Args:
            mapping: category name or alias -> factor

        Raises:
            MissingFactorError: If any category has no factor
            NonFiniteInputError: If a factor is NaN or infinite
            InvalidSchema: If a factor is negative or not a number
        """
        resolved: Dict[str, Any] = {}
        for key, value in mapping.items():
            try:
                resolved[get_category(str(key)).name] = value
            except KeyError:
                logger.warning("Ignoring factor for unknown category: %s", key)

        for category in CATEGORIES:
            if category.name not in resolved:
                raise MissingFactorError(category=category.name)

        for name, value in resolved.items():
            # covers numeric strings such as "nan" read from YAML
            try:
                number = float(value)
            except (TypeError, ValueError):
                continue
            if not math.isfinite(number):
                raise NonFiniteInputError(category=name, value=number, source="factor")

        try:
            return cls(**resolved)
        except PydanticValidationError as e:
            raise InvalidSchema(
                message=f"Invalid emission factor table: {e.error_count()} error(s)",
                schema_errors=[
                    {"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()
                ],
            ) from e


# Default emission factors (kg CO2e per unit)
# Based on GHG Protocol and EPA emission factors
DEFAULT_EMISSION_FACTORS = EmissionFactorTable(
    # Scope 1
    natural_gas=2.0,
    diesel=2.68,
    petrol=2.31,
    refrigerants=1430,
    lpg=2.98,
    # Scope 2 (varies by region, global average)
    electricity=0.42,
    heating=0.23,
    cooling=0.45,
    steam=0.19,
    # Scope 3
    business_travel=0.171,
    employee_commuting=0.14,
    waste_generated=430,
    purchased_goods=0.0005,
    upstream_transport=0.062,
    downstream_transport=0.062,
)


def load_factor_table(path: Union[str, Path]) -> EmissionFactorTable:
    """
    Load a custom emission factor table from YAML or JSON.

    The document is either a flat ``category: factor`` mapping or holds that
    mapping under a top-level ``factors`` key.

    Args:
        path: Path to a .yaml/.yml/.json file

    Returns:
        Complete EmissionFactorTable

    Raises:
        MissingData: If the file does not exist
        InvalidSchema: If the file cannot be parsed or has the wrong shape
        MissingFactorError: If a category is missing
    """
    path = Path(path)
    if not path.exists():
        raise MissingData(
            message=f"Emission factor file not found: {path}",
            data_type="emission_factors",
            missing_fields=[str(path)],
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.error("Failed to parse emission factor file %s: %s", path, e)
        raise InvalidSchema(
            message=f"Failed to parse emission factor file: {path}",
            data_source=str(path),
        ) from e

    if isinstance(data, dict) and isinstance(data.get("factors"), dict):
        data = data["factors"]
    if not isinstance(data, dict):
        raise InvalidSchema(
            message="Emission factor file must contain a mapping of category to factor",
            data_source=str(path),
        )

    table = EmissionFactorTable.from_mapping(data)
    logger.info("Loaded emission factor table from %s", path)
    return table
