"""
Activity Record Tests

Covers the closed per-scope records, user-input sanitisation and the
ActivityData bundle.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from carbonscope.calculation import (
    ActivityData,
    Scope,
    Scope1Activity,
    Scope2Activity,
    Scope3Activity,
    categories_for,
    get_category,
)
from carbonscope.exceptions import InvalidSchema


# ==================== CATEGORIES ====================

class TestCategories:

    def test_scope_sizes(self):
        assert len(categories_for(Scope.SCOPE1)) == 5
        assert len(categories_for(Scope.SCOPE2)) == 4
        assert len(categories_for(Scope.SCOPE3)) == 6

    def test_scope_label(self):
        assert Scope.SCOPE2.label == "Scope 2"

    def test_lookup_by_alias(self):
        category = get_category("employeeCommuting")
        assert category.name == "employee_commuting"
        assert category.scope == Scope.SCOPE3

    def test_unknown_category(self):
        with pytest.raises(KeyError):
            get_category("coal")


# ==================== RECORDS ====================

class TestActivityRecords:
    """Closed, fixed-field records"""

    def test_defaults_are_zero(self):
        assert all(value == 0 for _, value in Scope3Activity().values())

    def test_values_in_declaration_order(self):
        record = Scope2Activity(electricity=1, heating=2, cooling=3, steam=4)
        assert record.values() == [
            ("electricity", 1), ("heating", 2), ("cooling", 3), ("steam", 4),
        ]

    def test_alias_and_name_accepted(self):
        by_alias = Scope1Activity(naturalGas=10)
        by_name = Scope1Activity(natural_gas=10)
        assert by_alias == by_name

    def test_unknown_field_rejected(self):
        """Misspelled categories are rejected instead of silently ignored"""
        with pytest.raises(PydanticValidationError):
            Scope1Activity(natral_gas=10)

    def test_cross_scope_field_rejected(self):
        with pytest.raises(PydanticValidationError):
            Scope2Activity(diesel=10)

    def test_records_are_frozen(self):
        record = Scope1Activity(diesel=5)
        with pytest.raises(PydanticValidationError):
            record.diesel = 10

    def test_negative_values_accepted(self):
        """Records hold any real number; clamping happens at the input boundary"""
        assert Scope1Activity(diesel=-5).diesel == -5

    def test_scaled(self):
        record = Scope3Activity(business_travel=100, waste_generated=2).scaled(3)
        assert record.business_travel == 300
        assert record.waste_generated == 6

    def test_get_by_alias(self):
        assert Scope3Activity(purchased_goods=42).get("purchasedGoods") == 42

    def test_to_dict_by_alias(self):
        data = Scope1Activity(natural_gas=1).to_dict(by_alias=True)
        assert data["naturalGas"] == 1
        assert set(data) == {"naturalGas", "diesel", "petrol", "refrigerants", "lpg"}


# ==================== USER INPUT ====================

class TestFromUserInput:
    """Sanitisation of raw form/file input"""

    def test_negative_clamped_to_zero(self):
        assert Scope1Activity.from_user_input({"diesel": -100}).diesel == 0

    @pytest.mark.parametrize("raw", ["abc", "", None, [1], float("nan"), float("inf")])
    def test_invalid_values_become_zero(self, raw):
        assert Scope2Activity.from_user_input({"electricity": raw}).electricity == 0

    def test_numeric_strings_parsed(self):
        assert Scope2Activity.from_user_input({"electricity": " 1500.5 "}).electricity == 1500.5

    def test_camel_case_keys(self):
        record = Scope3Activity.from_user_input({"businessTravel": 10, "waste_generated": 2})
        assert record.business_travel == 10
        assert record.waste_generated == 2

    def test_unknown_and_foreign_keys_ignored(self, caplog):
        with caplog.at_level("WARNING", logger="carbonscope"):
            record = Scope1Activity.from_user_input({"coal": 5, "electricity": 7, "lpg": 3})

        assert record == Scope1Activity(lpg=3)
        assert "coal" in caplog.text
        assert "electricity" in caplog.text

    def test_none_input(self):
        assert Scope1Activity.from_user_input(None) == Scope1Activity()


# ==================== BUNDLE ====================

class TestActivityData:

    def test_from_dict_sanitizes(self):
        data = ActivityData.from_dict({
            "scope1": {"naturalGas": 1000, "diesel": -5},
            "scope3": {"businessTravel": "200"},
        })

        assert data.scope1.natural_gas == 1000
        assert data.scope1.diesel == 0
        assert data.scope2 == Scope2Activity()
        assert data.scope3.business_travel == 200

    def test_from_dict_strict(self):
        """Strict validation errors surface as InvalidSchema"""
        with pytest.raises(InvalidSchema) as exc_info:
            ActivityData.from_dict({"scope1": {"coal": 1}}, sanitize=False)

        assert exc_info.value.context["data_source"] == "scope1"
        assert exc_info.value.context["schema_errors"][0]["loc"] == ["scope1", "coal"]
        assert isinstance(exc_info.value.__cause__, PydanticValidationError)

    @pytest.mark.parametrize("sanitize", [True, False])
    @pytest.mark.parametrize("section", [[1, 2], "diesel", 42])
    def test_section_not_a_mapping(self, section, sanitize):
        with pytest.raises(InvalidSchema) as exc_info:
            ActivityData.from_dict({"scope2": section}, sanitize=sanitize)

        assert exc_info.value.context["data_source"] == "scope2"

    def test_strict_keeps_negative_values(self):
        data = ActivityData.from_dict({"scope1": {"diesel": -5}}, sanitize=False)
        assert data.scope1.diesel == -5

    def test_record_by_scope(self):
        data = ActivityData(scope2=Scope2Activity(steam=9))
        assert data.record(Scope.SCOPE2).steam == 9
        assert data.record("scope1") == Scope1Activity()

    def test_empty(self):
        assert ActivityData.from_dict(None) == ActivityData()
