"""
Calculation Engine Tests

This test suite validates:
- Unit conversion from kg to tonnes
- Linearity, additivity and breakdown consistency
- Zero input -> zero output
- Determinism: same input -> bit-identical output
- Fail-loud behaviour on missing factors and NaN/inf inputs
- End-to-end totals for the sample baseline
"""

import json
import math

import pytest

from carbonscope.calculation import (
    DEFAULT_EMISSION_FACTORS,
    KG_PER_TONNE,
    ActivityData,
    Scope,
    Scope1Activity,
    Scope2Activity,
    Scope3Activity,
    compute_activity,
    compute_scope,
    compute_total,
)
from carbonscope.exceptions import MissingFactorError, NonFiniteInputError, ValidationError


def _empty():
    return Scope1Activity(), Scope2Activity(), Scope3Activity()


# ==================== compute_scope ====================

class TestComputeScope:
    """Tests for the per-scope computation (kg CO2e)."""

    def test_breakdown_is_activity_times_factor(self, baseline_scope1):
        """Each category contributes activity x factor."""
        result = compute_scope(baseline_scope1)

        assert result.scope == Scope.SCOPE1
        assert result.breakdown["natural_gas"] == 50000 * 2.0
        assert result.breakdown["diesel"] == 15000 * 2.68
        assert result.breakdown["petrol"] == 8000 * 2.31
        assert result.breakdown["refrigerants"] == 50 * 1430
        assert result.breakdown["lpg"] == 2000 * 2.98

    def test_breakdown_keys_follow_declaration_order(self, baseline_scope3):
        """Breakdown keys come out in the fixed category order."""
        result = compute_scope(baseline_scope3)

        assert list(result.breakdown) == [
            "business_travel",
            "employee_commuting",
            "waste_generated",
            "purchased_goods",
            "upstream_transport",
            "downstream_transport",
        ]

    def test_total_is_ordered_sum_of_breakdown(self, baseline_scope2):
        """Total equals the left-to-right sum of the breakdown."""
        result = compute_scope(baseline_scope2)

        expected = 0.0
        for value in result.breakdown.values():
            expected += value
        assert result.total == expected
        assert result.total == pytest.approx(278500)

    def test_zero_factor_gives_zero_contribution(self):
        """A zero factor is a legitimate zero, not an error."""
        factors = DEFAULT_EMISSION_FACTORS.with_overrides(diesel=0)
        result = compute_scope(Scope1Activity(diesel=1000), factors)

        assert result.breakdown["diesel"] == 0
        assert result.total == 0

    def test_breakdown_is_read_only(self, baseline_scope1):
        """Breakdown mapping cannot be modified by the caller."""
        result = compute_scope(baseline_scope1)

        with pytest.raises(TypeError):
            result.breakdown["diesel"] = 0.0


# ==================== compute_total ====================

class TestComputeTotal:
    """Tests for the full calculation (tonnes CO2e)."""

    def test_unit_conversion(self):
        """1000 m3 natural gas at 2.0 kg/m3 is exactly 2.0 tonnes."""
        result = compute_total(Scope1Activity(natural_gas=1000), Scope2Activity(), Scope3Activity())

        assert result.scope1_total == 2.0
        assert result.breakdown["scope1"]["natural_gas"] == 2.0
        assert result.total_emissions == 2.0
        assert result.unit == "tCO2e"

    def test_end_to_end_baseline_scope1(self, baseline_scope1):
        """(100000 + 40200 + 18480 + 71500 + 5960) / 1000 = 236.14 t."""
        result = compute_total(baseline_scope1, Scope2Activity(), Scope3Activity())

        assert result.scope1_total == pytest.approx(236.14)
        assert result.breakdown["scope1"]["refrigerants"] == pytest.approx(71.5)

    def test_end_to_end_baseline_all_scopes(self, baseline_scope1, baseline_scope2, baseline_scope3):
        """Baseline scenario totals per scope and overall."""
        result = compute_total(baseline_scope1, baseline_scope2, baseline_scope3)

        assert result.scope1_total == pytest.approx(236.14)
        assert result.scope2_total == pytest.approx(278.5)
        assert result.scope3_total == pytest.approx(165.2)
        assert result.total_emissions == pytest.approx(679.84)

    def test_total_is_sum_of_tonne_scope_totals(self, baseline_scope1, baseline_scope2, baseline_scope3):
        """Grand total is the sum of the three converted scope totals."""
        result = compute_total(baseline_scope1, baseline_scope2, baseline_scope3)

        assert result.total_emissions == (
            result.scope1_total + result.scope2_total + result.scope3_total
        )

    def test_breakdown_consistency(self, baseline_scope1, baseline_scope2, baseline_scope3):
        """Each scope total equals the sum of its breakdown."""
        result = compute_total(baseline_scope1, baseline_scope2, baseline_scope3)

        for scope in Scope:
            breakdown_sum = math.fsum(result.breakdown[scope.value].values())
            assert result.scope_total(scope) == pytest.approx(breakdown_sum, rel=1e-9)

    def test_breakdown_entries_converted_individually(self, baseline_scope2):
        """Breakdown entries are the kg contributions divided by 1000."""
        kg = compute_scope(baseline_scope2)
        result = compute_total(Scope1Activity(), baseline_scope2, Scope3Activity())

        for name, value in kg.breakdown.items():
            assert result.breakdown["scope2"][name] == value / KG_PER_TONNE
        assert result.scope2_total == kg.total / KG_PER_TONNE

    def test_zero_input_zero_output(self):
        """All-zero activity gives an all-zero result for any factor table."""
        factors = DEFAULT_EMISSION_FACTORS.with_overrides(refrigerants=5000, electricity=1.2)
        result = compute_total(*_empty(), factors=factors)

        assert result.scope1_total == 0
        assert result.scope2_total == 0
        assert result.scope3_total == 0
        assert result.total_emissions == 0
        for values in result.breakdown.values():
            assert all(v == 0 for v in values.values())

    @pytest.mark.parametrize("multiplier", [2, 3.5, 10])
    def test_linearity(self, baseline_scope1, baseline_scope2, baseline_scope3, multiplier):
        """Scaling every activity value scales every output by the same factor."""
        base = compute_total(baseline_scope1, baseline_scope2, baseline_scope3)
        scaled = compute_total(
            baseline_scope1.scaled(multiplier),
            baseline_scope2.scaled(multiplier),
            baseline_scope3.scaled(multiplier),
        )

        for scope in Scope:
            assert scaled.scope_total(scope) == pytest.approx(
                base.scope_total(scope) * multiplier, rel=1e-12
            )
            for name, value in base.breakdown[scope.value].items():
                assert scaled.breakdown[scope.value][name] == pytest.approx(
                    value * multiplier, rel=1e-12
                )

    def test_scopes_are_independent(self, baseline_scope1, baseline_scope2):
        """Changing one scope's input leaves the other scopes untouched."""
        a = compute_total(baseline_scope1, baseline_scope2, Scope3Activity())
        b = compute_total(baseline_scope1, Scope2Activity(), Scope3Activity())

        assert a.scope1_total == b.scope1_total
        assert b.scope2_total == 0

    def test_negative_values_propagate(self):
        """Negative activity is not rejected; it yields a negative contribution."""
        result = compute_total(Scope1Activity(diesel=-1000), Scope2Activity(), Scope3Activity())

        assert result.scope1_total == pytest.approx(-2.68)
        assert result.total_emissions == pytest.approx(-2.68)

    def test_custom_factor_table(self, baseline_scope2):
        """A substituted factor table is used for every category."""
        factors = DEFAULT_EMISSION_FACTORS.with_overrides(electricity=0.1)
        result = compute_total(Scope1Activity(), baseline_scope2, Scope3Activity(), factors)

        assert result.breakdown["scope2"]["electricity"] == pytest.approx(50.0)

    def test_factor_mapping_accepted(self, factor_mapping, baseline_scope1):
        """A complete plain mapping is accepted in place of a table."""
        result = compute_total(baseline_scope1, Scope2Activity(), Scope3Activity(), factor_mapping)

        assert result.scope1_total == pytest.approx(236.14)

    def test_inputs_not_mutated(self, baseline_scope1):
        """Engine leaves caller records untouched."""
        before = baseline_scope1.to_dict()
        compute_total(baseline_scope1, Scope2Activity(), Scope3Activity())

        assert baseline_scope1.to_dict() == before

    def test_compute_activity_bundle(self, baseline_scope1, baseline_scope2, baseline_scope3):
        """ActivityData bundles give the same result as separate records."""
        bundle = ActivityData(scope1=baseline_scope1, scope2=baseline_scope2, scope3=baseline_scope3)

        assert compute_activity(bundle).to_dict() == compute_total(
            baseline_scope1, baseline_scope2, baseline_scope3
        ).to_dict()

    def test_records_in_wrong_position_rejected(self):
        """Scope records must be passed in scope order."""
        with pytest.raises(ValidationError):
            compute_total(Scope2Activity(), Scope1Activity(), Scope3Activity())


# ==================== DETERMINISM ====================

class TestDeterminism:
    """Same input -> same output, bit for bit."""

    def test_repeated_calls_identical(self, baseline_scope1, baseline_scope2, baseline_scope3):
        """Two calls produce identical values and provenance hashes."""
        first = compute_total(baseline_scope1, baseline_scope2, baseline_scope3)
        second = compute_total(baseline_scope1, baseline_scope2, baseline_scope3)

        assert first.to_dict() == second.to_dict()
        assert first.total_emissions.hex() == second.total_emissions.hex()
        assert first.provenance_hash == second.provenance_hash

    def test_provenance_hash_changes_with_input(self, baseline_scope1):
        """Different inputs produce different hashes."""
        a = compute_total(baseline_scope1, Scope2Activity(), Scope3Activity())
        b = compute_total(baseline_scope1.scaled(2), Scope2Activity(), Scope3Activity())

        assert a.provenance_hash != b.provenance_hash
        assert len(a.provenance_hash) == 64
        assert a.verify_provenance()

    def test_serialization(self, baseline_scope1):
        """Results serialize to JSON with snake_case or camelCase keys."""
        result = compute_total(baseline_scope1, Scope2Activity(), Scope3Activity())

        plain = json.loads(result.to_json())
        assert plain["scope1_total"] == result.scope1_total
        assert plain["breakdown"]["scope1"]["natural_gas"] == 100.0

        aliased = result.to_dict(by_alias=True)
        assert aliased["totalEmissions"] == result.total_emissions
        assert aliased["breakdown"]["scope1"]["naturalGas"] == 100.0
        assert "businessTravel" in aliased["breakdown"]["scope3"]


# ==================== FAULTS ====================

class TestEngineFaults:
    """Missing factors and non-finite values fail loudly."""

    def test_missing_factor_in_mapping(self, factor_mapping):
        """A custom mapping without a category raises MissingFactorError."""
        del factor_mapping["lpg"]

        with pytest.raises(MissingFactorError) as exc_info:
            compute_total(*_empty(), factors=factor_mapping)

        assert exc_info.value.category == "lpg"
        assert exc_info.value.context["category"] == "lpg"
        assert "lpg" in str(exc_info.value)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_activity_rejected(self, bad):
        """NaN/inf activity values raise instead of poisoning the total."""
        with pytest.raises(NonFiniteInputError) as exc_info:
            compute_total(Scope1Activity(), Scope2Activity(steam=bad), Scope3Activity())

        assert exc_info.value.scope == "scope2"
        assert exc_info.value.category == "steam"

    def test_non_finite_activity_in_later_scope_checked_first(self):
        """Validation happens before any scope is computed."""
        with pytest.raises(NonFiniteInputError) as exc_info:
            compute_total(
                Scope1Activity(diesel=10),
                Scope2Activity(),
                Scope3Activity(purchased_goods=float("nan")),
            )

        assert exc_info.value.scope == "scope3"

    def test_non_finite_factor_rejected(self):
        """An infinite factor in a table is rejected by the engine."""
        factors = DEFAULT_EMISSION_FACTORS.model_copy(update={"heating": float("inf")})

        with pytest.raises(NonFiniteInputError) as exc_info:
            compute_scope(Scope2Activity(heating=1), factors)

        assert exc_info.value.context["source"] == "factor"

    def test_non_finite_factor_in_mapping_rejected(self, factor_mapping):
        """A NaN factor in a mapping is rejected while building the table."""
        factor_mapping["diesel"] = float("nan")

        with pytest.raises(NonFiniteInputError):
            compute_total(*_empty(), factors=factor_mapping)
