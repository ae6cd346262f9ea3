# -*- coding: utf-8 -*-
"""
Activity Records - raw activity quantities per scope

Each record is a closed, fixed-field structure: one float per category of its
scope, in the category's own unit (m3, L, kg, kWh, km, tonnes, currency,
tonne-km). Unknown or misspelled keys are rejected by pydantic.

Records accept any real number. Clamping to non-negative values is the job
of the collection boundary, see ``from_user_input``.
"""

import logging
import math
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from carbonscope.calculation.categories import Scope, category_names, get_category
from carbonscope.exceptions import InvalidSchema

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound="ActivityRecord")


def _sanitize(raw: Any) -> float:
    """Coerce a user-entered value: non-numeric, non-finite and negative -> 0"""
    if isinstance(raw, str):
        raw = raw.strip()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


class ActivityRecord(BaseModel):
    """Base class for the three per-scope activity records"""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    SCOPE: ClassVar[Scope]

    def values(self) -> List[Tuple[str, float]]:
        """(category, quantity) pairs in declaration order"""
        return [(name, getattr(self, name)) for name in category_names(self.SCOPE)]

    def get(self, category: str) -> float:
        return getattr(self, get_category(category).name)

    def scaled(self: RecordT, factor: float) -> RecordT:
        """New record with every quantity multiplied by ``factor``"""
        return self.model_copy(
            update={name: value * factor for name, value in self.values()}
        )

    def to_dict(self, by_alias: bool = False) -> Dict[str, float]:
        return self.model_dump(by_alias=by_alias)

    @classmethod
    def from_user_input(cls: Type[RecordT], data: Optional[Mapping[str, Any]]) -> RecordT:
        """
        Build a record from raw form/file input.

        Negative entries are clamped to zero and non-numeric or non-finite
        entries are treated as zero. Keys may be snake_case names or camelCase
        aliases; keys outside this scope are ignored with a warning.

        Args:
            data: Raw mapping of category -> entered value

        Returns:
            Sanitised activity record
        """
        clean: Dict[str, float] = {}
        for key, raw in (data or {}).items():
            try:
                category = get_category(str(key))
            except KeyError:
                logger.warning("Ignoring unknown %s category: %s", cls.SCOPE.value, key)
                continue
            if category.scope != cls.SCOPE:
                logger.warning(
                    "Ignoring %s category %s in %s input",
                    category.scope.value, key, cls.SCOPE.value,
                )
                continue
            value = _sanitize(raw)
            if value == 0.0 and raw not in (0, 0.0, None):
                logger.debug("Coerced %s.%s=%r to 0", cls.SCOPE.value, key, raw)
            clean[category.name] = value
        return cls(**clean)


class Scope1Activity(ActivityRecord):
    """Direct emission sources"""

    SCOPE: ClassVar[Scope] = Scope.SCOPE1

    natural_gas: float = Field(0.0, alias="naturalGas", description="m3")
    diesel: float = Field(0.0, description="liters")
    petrol: float = Field(0.0, description="liters")
    refrigerants: float = Field(0.0, description="kg")
    lpg: float = Field(0.0, description="kg")


class Scope2Activity(ActivityRecord):
    """Purchased energy"""

    SCOPE: ClassVar[Scope] = Scope.SCOPE2

    electricity: float = Field(0.0, description="kWh")
    heating: float = Field(0.0, description="kWh")
    cooling: float = Field(0.0, description="kWh")
    steam: float = Field(0.0, description="kWh")


class Scope3Activity(ActivityRecord):
    """Value-chain emission sources"""

    SCOPE: ClassVar[Scope] = Scope.SCOPE3

    business_travel: float = Field(0.0, alias="businessTravel", description="km")
    employee_commuting: float = Field(0.0, alias="employeeCommuting", description="km")
    waste_generated: float = Field(0.0, alias="wasteGenerated", description="tonnes")
    purchased_goods: float = Field(0.0, alias="purchasedGoods", description="currency units")
    upstream_transport: float = Field(0.0, alias="upstreamTransport", description="tonne-km")
    downstream_transport: float = Field(0.0, alias="downstreamTransport", description="tonne-km")


RECORD_TYPES: Dict[Scope, Type[ActivityRecord]] = {
    Scope.SCOPE1: Scope1Activity,
    Scope.SCOPE2: Scope2Activity,
    Scope.SCOPE3: Scope3Activity,
}


class ActivityData(BaseModel):
    """The three activity records of one calculation request"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    scope1: Scope1Activity = Field(default_factory=Scope1Activity)
    scope2: Scope2Activity = Field(default_factory=Scope2Activity)
    scope3: Scope3Activity = Field(default_factory=Scope3Activity)

    def record(self, scope: Scope) -> ActivityRecord:
        return getattr(self, Scope(scope).value)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]], sanitize: bool = True) -> "ActivityData":
        """
        Build from a ``{"scope1": {...}, "scope2": {...}, "scope3": {...}}`` mapping.

        With ``sanitize`` (the default) entries go through
        ``from_user_input``; otherwise they are validated strictly.

        Raises:
            InvalidSchema: If a scope section is not a mapping, or a strict
                record fails validation
        """
        data = data or {}
        records = {}
        for scope, record_type in RECORD_TYPES.items():
            raw = data.get(scope.value) or {}
            if not isinstance(raw, Mapping):
                raise InvalidSchema(
                    message=f"Activity section '{scope.value}' must be a mapping of category to quantity",
                    data_source=scope.value,
                    schema_errors=[{"loc": [scope.value], "msg": f"got {type(raw).__name__}"}],
                )
            if sanitize:
                records[scope.value] = record_type.from_user_input(raw)
                continue
            try:
                records[scope.value] = record_type.model_validate(raw)
            except PydanticValidationError as e:
                raise InvalidSchema(
                    message=f"Invalid {scope.label} activity: {e.error_count()} error(s)",
                    data_source=scope.value,
                    schema_errors=[
                        {"loc": [scope.value, *err["loc"]], "msg": err["msg"]} for err in e.errors()
                    ],
                ) from e
        return cls(**records)
