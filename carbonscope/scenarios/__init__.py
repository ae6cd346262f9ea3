"""
CarbonScope Scenarios

Named activity scenarios and their comparison against a baseline.
"""

from carbonscope.scenarios.models import SAMPLE_SCENARIOS_PATH, Scenario, load_scenarios
from carbonscope.scenarios.comparison import (
    DEFAULT_BASELINE_ID,
    ScenarioComparison,
    ScenarioOutcome,
    compare_scenarios,
    label_for,
)

__all__ = [
    "SAMPLE_SCENARIOS_PATH",
    "Scenario",
    "load_scenarios",
    "DEFAULT_BASELINE_ID",
    "ScenarioComparison",
    "ScenarioOutcome",
    "compare_scenarios",
    "label_for",
]
