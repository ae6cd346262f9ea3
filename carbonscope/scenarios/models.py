# -*- coding: utf-8 -*-
"""
Scenario Models

A scenario is a named bundle of the three activity records, optionally with
its computed result attached.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic import ValidationError as PydanticValidationError

from carbonscope.calculation.activity import Scope1Activity, Scope2Activity, Scope3Activity
from carbonscope.calculation.engine import CalculationResult, FactorsLike, compute_total
from carbonscope.exceptions import InvalidSchema, MissingData

logger = logging.getLogger(__name__)

SAMPLE_SCENARIOS_PATH = Path(__file__).parent.parent / "data" / "sample_scenarios.yaml"


class Scenario(BaseModel):
    """Named set of activity records used for comparison"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1)
    name: str
    description: str = ""
    scope1: Scope1Activity = Field(default_factory=Scope1Activity)
    scope2: Scope2Activity = Field(default_factory=Scope2Activity)
    scope3: Scope3Activity = Field(default_factory=Scope3Activity)
    _result: Optional[CalculationResult] = PrivateAttr(default=None)

    @property
    def result(self) -> Optional[CalculationResult]:
        """Attached calculation result, None until evaluated"""
        return self._result

    def evaluate(self, factors: Optional[FactorsLike] = None) -> "Scenario":
        """Copy of this scenario with its calculation result attached"""
        evaluated = self.model_copy()
        evaluated._result = compute_total(self.scope1, self.scope2, self.scope3, factors)
        return evaluated


def load_scenarios(path: Optional[Union[str, Path]] = None) -> List[Scenario]:
    """
    Load scenarios from a YAML file.

    The document holds a list of scenarios, either at the top level or under
    a ``scenarios`` key. Without a path the bundled sample scenarios are
    loaded.

    Args:
        path: Scenario YAML file

    Returns:
        Scenarios in file order, without results

    Raises:
        MissingData: If the file does not exist
        InvalidSchema: If the file cannot be parsed or a scenario is invalid
    """
    path = Path(path) if path is not None else SAMPLE_SCENARIOS_PATH
    if not path.exists():
        raise MissingData(
            message=f"Scenario file not found: {path}",
            data_type="scenarios",
            missing_fields=[str(path)],
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError, OSError) as e:
        logger.error("Failed to parse scenario file %s: %s", path, e)
        raise InvalidSchema(
            message=f"Failed to parse scenario file: {path}",
            data_source=str(path),
        ) from e

    if isinstance(data, dict):
        data = data.get("scenarios")
    if not isinstance(data, list):
        raise InvalidSchema(
            message="Scenario file must contain a list of scenarios",
            data_source=str(path),
        )

    scenarios = []
    for index, item in enumerate(data):
        try:
            scenarios.append(Scenario.model_validate(item))
        except PydanticValidationError as e:
            raise InvalidSchema(
                message=f"Invalid scenario at position {index}",
                data_source=str(path),
                schema_errors=[
                    {"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()
                ],
            ) from e

    logger.info("Loaded %d scenario(s) from %s", len(scenarios), path)
    return scenarios
