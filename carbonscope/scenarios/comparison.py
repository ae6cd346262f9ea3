# -*- coding: utf-8 -*-
"""
Scenario Comparison

Evaluates a set of scenarios and compares each one against a baseline using
the signed reduction percentage (positive = reduction, negative = increase).
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from carbonscope.calculation.categories import Scope
from carbonscope.calculation.engine import CalculationResult, FactorsLike
from carbonscope.calculation.metrics import reduction_percentage
from carbonscope.exceptions import MissingData, ValidationError
from carbonscope.scenarios.models import Scenario

logger = logging.getLogger(__name__)

DEFAULT_BASELINE_ID = "baseline"


def label_for(reduction: float) -> str:
    """Wording for a signed reduction percentage"""
    if reduction > 0:
        return "reduction"
    if reduction < 0:
        return "increase"
    return "no change"


@dataclass(frozen=True)
class ScenarioOutcome:
    """One evaluated scenario and its change against the baseline"""
    scenario: Scenario
    reduction: float
    is_baseline: bool = False

    @property
    def result(self) -> CalculationResult:
        return self.scenario.result

    @property
    def label(self) -> str:
        return label_for(self.reduction)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.scenario.id,
            "name": self.scenario.name,
            "description": self.scenario.description,
            "scope1_total": self.result.scope1_total,
            "scope2_total": self.result.scope2_total,
            "scope3_total": self.result.scope3_total,
            "total_emissions": self.result.total_emissions,
            "reduction_percentage": self.reduction,
            "label": self.label,
            "is_baseline": self.is_baseline,
        }


@dataclass(frozen=True)
class ScenarioComparison:
    """Evaluated scenarios in input order, baseline included"""
    baseline: ScenarioOutcome
    outcomes: List[ScenarioOutcome]

    def get(self, scenario_id: str) -> ScenarioOutcome:
        for outcome in self.outcomes:
            if outcome.scenario.id == scenario_id:
                return outcome
        raise MissingData(
            message=f"Scenario not found: {scenario_id}",
            data_type="scenario",
            missing_fields=[scenario_id],
        )

    def best_scenario(self) -> Optional[ScenarioOutcome]:
        """
        Non-baseline scenario with the largest reduction.

        The first one wins on ties. None when only the baseline exists.
        """
        best: Optional[ScenarioOutcome] = None
        for outcome in self.outcomes:
            if outcome.is_baseline:
                continue
            if best is None or outcome.reduction > best.reduction:
                best = outcome
        return best

    def scope_reductions(self, scenario_id: str) -> Dict[str, float]:
        """Per-scope reduction of one scenario against the baseline"""
        result = self.get(scenario_id).result
        return {
            scope.value: reduction_percentage(
                self.baseline.result.scope_total(scope), result.scope_total(scope)
            )
            for scope in Scope
        }

    def to_dict(self) -> Dict[str, Any]:
        best = self.best_scenario()
        return {
            "baseline_id": self.baseline.scenario.id,
            "scenarios": [outcome.to_dict() for outcome in self.outcomes],
            "best_scenario_id": best.scenario.id if best else None,
        }


def compare_scenarios(
    scenarios: Iterable[Scenario],
    baseline_id: str = DEFAULT_BASELINE_ID,
    factors: Optional[FactorsLike] = None,
) -> ScenarioComparison:
    """
    Evaluate scenarios and compare them against the baseline.

    Args:
        scenarios: Scenarios to compare, baseline included
        baseline_id: Id of the baseline scenario
        factors: Factor table used for every scenario

    Returns:
        ScenarioComparison

    Raises:
        ValidationError: If two scenarios share an id
        MissingData: If no scenario has ``baseline_id``
    """
    scenarios = list(scenarios)

    seen = set()
    duplicates = []
    for scenario in scenarios:
        if scenario.id in seen:
            duplicates.append(scenario.id)
        seen.add(scenario.id)
    if duplicates:
        raise ValidationError(
            message=f"Duplicate scenario ids: {', '.join(duplicates)}",
            invalid_fields={sid: "duplicate id" for sid in duplicates},
        )

    if baseline_id not in seen:
        raise MissingData(
            message=f"Baseline scenario not found: {baseline_id}",
            data_type="scenario",
            missing_fields=[baseline_id],
            context={"available_scenarios": [s.id for s in scenarios]},
        )

    evaluated = [scenario.evaluate(factors) for scenario in scenarios]
    baseline_total = next(s for s in evaluated if s.id == baseline_id).result.total_emissions

    outcomes = [
        ScenarioOutcome(
            scenario=scenario,
            reduction=reduction_percentage(baseline_total, scenario.result.total_emissions),
            is_baseline=scenario.id == baseline_id,
        )
        for scenario in evaluated
    ]
    baseline = next(o for o in outcomes if o.is_baseline)

    logger.info(
        "Compared %d scenario(s) against %s (%.2f tCO2e)",
        len(outcomes), baseline_id, baseline_total,
    )
    return ScenarioComparison(baseline=baseline, outcomes=outcomes)
